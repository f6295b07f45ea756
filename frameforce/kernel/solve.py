# frameforce/kernel/solve.py
"""Partitioned linear solve with mechanism detection."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class MechanismError(RuntimeError):
    """Raised when structure is unstable or ill-conditioned."""
    pass


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: list[int],
    cond_limit: float = 1e12
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·d = F with fixed DOFs held at zero, by partitioning.

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        fixed_dofs: Constrained DOF indices
        cond_limit: Max condition number of the free-free block

    Returns:
        d: Displacement vector (ndof,)
        R: Reaction vector (ndof,), nonzero only at fixed DOFs
        free: Array of free DOF indices

    Raises:
        MechanismError: If the free-free block is singular or cond > cond_limit
    """
    ndof = K.shape[0]

    fixed_set = set(int(i) for i in fixed_dofs)
    free = np.array([i for i in range(ndof) if i not in fixed_set], dtype=int)

    d = np.zeros(ndof, dtype=float)
    if free.size:
        Kff = K[np.ix_(free, free)]
        Ff = F[free]

        cond = np.linalg.cond(Kff)
        logger.debug("free DOFs=%d, cond(Kff)=%.3e", free.size, cond)
        if not np.isfinite(cond) or cond > cond_limit:
            raise MechanismError(
                f"Unstable system (cond={cond:.2e}). Check supports and releases. "
                f"Need cond < {cond_limit:.0e}."
            )

        d[free] = np.linalg.solve(Kff, Ff)

    # R = K·d - F, zeroed at free DOFs where it is only round-off
    R = K @ d - F
    R[free] = 0.0

    return d, R, free
