# frameforce/settings.py
"""
Analysis configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class AnalysisSettings:
    """Defaults shared by the solver and the force samplers."""

    # Sampling
    resolution: int = 20               # sample points per element when none is given

    # Linear solve
    cond_limit: float = 1e12           # MechanismError above this condition number

    # Geometry / load placement
    position_tolerance: float = 1e-9   # relative to L, for the x >= a point-load test
    vertical_tolerance: float = 1e-6   # |x_local · Y| within this of 1 counts as vertical

    def validate(self) -> None:
        if self.resolution < 2:
            raise ValueError(f"resolution must be at least 2, got {self.resolution}")
        if self.cond_limit <= 0.0:
            raise ValueError("cond_limit must be positive")
        if self.position_tolerance < 0.0:
            raise ValueError("position_tolerance must be non-negative")
        if not 0.0 < self.vertical_tolerance < 1.0:
            raise ValueError("vertical_tolerance must be in (0, 1)")


# Global settings instance
SETTINGS = AnalysisSettings()
