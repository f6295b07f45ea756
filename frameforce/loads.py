# frameforce/loads.py
"""
ELEMENT LOADS: Line and Point Loads on 3D Frame Elements
========================================================

Every load is bound to exactly one element and knows how to:

- express its global vector in the element's local frame (local_value)
- contribute to the five internal-force diagrams at given cuts (contribute)
- report the end reactions of its element with both nodes held still
  (fixed_end_forces), which the solver negates into equivalent nodal loads

A new load kind is a new ElementLoad subclass. Nothing that consumes loads
needs to change.

    LineLoad(element, [0.0, -5e3, 0.0])                 # 5 kN/m in global -Y
    PointLoad(element, [0.0, -10e3, 0.0], position=0.5)  # 10 kN at midspan
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .beam_theory import (
    line_reactions,
    m_line,
    m_point,
    p_line,
    p_point,
    point_reactions,
    v_line,
    v_point,
)
from .model import Element
from .settings import AnalysisSettings, SETTINGS

# Local x keeps its sign; transverse components are flipped so that a
# positive magnitude acts in -y / -z.
LOCAL_SIGN = np.array([1.0, -1.0, -1.0])

Diagrams = Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]


def _as_vector(value) -> np.ndarray:
    v = np.asarray(value, dtype=float).reshape(-1)
    if v.shape != (3,):
        raise ValueError(f"load value must have 3 components, got {v.shape[0]}")
    return v


class ElementLoad(ABC):
    """Common interface of loads bound to one element."""

    element: Element
    value: np.ndarray
    load_id: Optional[int]

    def local_value(self) -> np.ndarray:
        """Load vector in the element's local axes, transverse components negated."""
        return (self.element.lambda_ @ self.value) * LOCAL_SIGN

    @abstractmethod
    def contribute(self, x, settings: Optional[AnalysisSettings] = None) -> Diagrams:
        """Deltas (P, My, Vy, Mz, Vz) at the cuts x."""

    @abstractmethod
    def fixed_end_forces(self) -> np.ndarray:
        """12-vector of restrained end reactions in local coordinates."""

    def _end_vector(
        self,
        axial: Tuple[float, float],
        y_plane: Tuple[float, float, float, float],
        z_plane: Tuple[float, float, float, float],
    ) -> np.ndarray:
        """
        Assemble the 12 local end reactions.

        Each plane tuple is (R1, M1, total, moment_about_end) in the flipped
        frame. The end shear and moment follow from element equilibrium.
        """
        L = self.element.length
        f = np.zeros(12, dtype=float)
        f[0], f[6] = axial

        R1, M1, W, T = y_plane
        M2 = M1 - R1 * L + T
        f[1], f[5], f[7], f[11] = R1, M1, W - R1, -M2

        R1, M1, W, T = z_plane
        M2 = M1 - R1 * L + T
        f[2], f[4], f[8], f[10] = R1, -M1, W - R1, M2

        return f


@dataclass(eq=False)
class LineLoad(ElementLoad):
    """
    Uniform distributed load over the full element length.

    Parameters:
    -----------
    element : Element
        The element carrying the load
    value : array-like, shape (3,)
        Intensity in global coordinates (N/m)
    """
    element: Element
    value: np.ndarray
    load_id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        self.value = _as_vector(self.value)

    def contribute(self, x, settings: Optional[AnalysisSettings] = None) -> Diagrams:
        L = self.element.length
        wx, wy, wz = self.local_value()
        return (
            p_line(wx, L, x),
            m_line(self.element, wy, L, x),
            v_line(self.element, wy, L, x),
            m_line(self.element, wz, L, x),
            v_line(self.element, wz, L, x),
        )

    def fixed_end_forces(self) -> np.ndarray:
        release = self.element.release
        L = self.element.length
        wx, wy, wz = self.local_value()
        return self._end_vector(
            (-wx * L / 2, -wx * L / 2),
            (*line_reactions(release, wy, L), wy * L, wy * L**2 / 2),
            (*line_reactions(release, wz, L), wz * L, wz * L**2 / 2),
        )


@dataclass(eq=False)
class PointLoad(ElementLoad):
    """
    Concentrated force at a fraction of the element length.

    Parameters:
    -----------
    element : Element
        The element carrying the load
    value : array-like, shape (3,)
        Force in global coordinates (N)
    position : float
        Location as a fraction of L, 0 (start) to 1 (end) inclusive
    """
    element: Element
    value: np.ndarray
    position: float = 0.5
    load_id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        self.value = _as_vector(self.value)
        if not 0.0 <= self.position <= 1.0:
            raise ValueError(f"position must be in [0, 1], got {self.position}")

    def contribute(self, x, settings: Optional[AnalysisSettings] = None) -> Diagrams:
        L = self.element.length
        frac = self.position
        tol = (settings or SETTINGS).position_tolerance
        px, py, pz = self.local_value()
        return (
            p_point(px, L, x, frac, tol),
            m_point(self.element, py, L, x, frac, tol),
            v_point(self.element, py, L, x, frac, tol),
            m_point(self.element, pz, L, x, frac, tol),
            v_point(self.element, pz, L, x, frac, tol),
        )

    def fixed_end_forces(self) -> np.ndarray:
        release = self.element.release
        L = self.element.length
        frac = self.position
        b = L * (1.0 - frac)
        px, py, pz = self.local_value()
        return self._end_vector(
            (-px * (1.0 - frac), -px * frac),
            (*point_reactions(release, py, L, frac), py, py * b),
            (*point_reactions(release, pz, L, frac), pz, pz * b),
        )
