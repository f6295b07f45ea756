# frameforce/beam_theory.py
"""
BEAM-THEORY CONTRIBUTIONS OF A SINGLE LOAD
==========================================

Each function returns the internal force (or moment) at cut x produced by
one load acting on the element with its end nodes held still. This is the
part of the internal force that end forces computed from nodal
displacements (R·K·u) do not contain when the load reached the solver as
equivalent nodal loads.

Free body of [0, x] with the restrained start reactions R1 (shear) and
M1 (moment) for the element's release condition:

    Line load w:          V(x) = R1 - w·x
                          M(x) = -M1 + R1·x - w·x²/2

    Point load p at a:    V(x) = R1 - p·H(x - a)
                          M(x) = -M1 + R1·x - p·(x - a)·H(x - a)

Axial loads are never released:

    Line load w:          P(x) = w·(L/2 - x)
    Point load p at a:    P(x) = p·((1 - a/L) - H(x - a))

SIGN CONVENTION:
----------------
Transverse magnitudes are in the element's flipped local frame (see
ElementLoad.local_value): positive w or p acts in -y / -z. With that
convention the same V and M functions serve both bending planes. The
Heaviside step is closed, H(x - a) = 1 for x >= a, so a load sitting exactly
on a sample point is already included there.

All functions accept a scalar or an array for x.
"""

from typing import Optional, Tuple

import numpy as np

from .elements import Release
from .settings import SETTINGS


def _check_length(L: float) -> None:
    if L <= 0.0:
        raise ValueError(f"element length must be positive, got {L}")


def heaviside(x, a: float, L: float, tolerance: Optional[float] = None) -> np.ndarray:
    """
    Closed step at a: 1.0 where x >= a - tolerance·L.

    `tolerance` defaults to SETTINGS.position_tolerance.
    """
    if tolerance is None:
        tolerance = SETTINGS.position_tolerance
    return (np.asarray(x, dtype=float) >= a - tolerance * L).astype(float)


def line_reactions(release: Release, w: float, L: float) -> Tuple[float, float]:
    """
    Restrained start shear R1 and start hogging moment M1 for a uniform load w.

    >>> line_reactions(Release.FIXED_FIXED, 12.0, 2.0)
    (12.0, 4.0)
    """
    if release is Release.FIXED_FIXED:
        return w * L / 2, w * L**2 / 12
    if release is Release.PINNED_FIXED:
        return 3 * w * L / 8, 0.0
    if release is Release.FIXED_PINNED:
        return 5 * w * L / 8, w * L**2 / 8
    return w * L / 2, 0.0


def point_reactions(release: Release, p: float, L: float, frac: float) -> Tuple[float, float]:
    """
    Restrained start shear R1 and start hogging moment M1 for a point load p
    at a = frac·L.
    """
    a = frac * L
    b = L - a
    if release is Release.FIXED_FIXED:
        return p * b**2 * (3 * a + b) / L**3, p * a * b**2 / L**2
    if release is Release.PINNED_FIXED:
        return p * b**2 * (2 * L + a) / (2 * L**3), 0.0
    if release is Release.FIXED_PINNED:
        M1 = p * a * b * (L + b) / (2 * L**2)
        return (p * b + M1) / L, M1
    return p * b / L, 0.0


# ---------------------------------------------------------------------------
# distributed load
# ---------------------------------------------------------------------------

def p_line(w: float, L: float, x):
    """Axial force from a uniform axial load w."""
    _check_length(L)
    x = np.asarray(x, dtype=float)
    return w * (L / 2 - x)


def m_line(element, w: float, L: float, x):
    """Bending moment from a uniform transverse load w."""
    _check_length(L)
    x = np.asarray(x, dtype=float)
    R1, M1 = line_reactions(element.release, w, L)
    return -M1 + R1 * x - w * x**2 / 2


def v_line(element, w: float, L: float, x):
    """Shear from a uniform transverse load w."""
    _check_length(L)
    x = np.asarray(x, dtype=float)
    R1, _ = line_reactions(element.release, w, L)
    return R1 - w * x


# ---------------------------------------------------------------------------
# concentrated load
# ---------------------------------------------------------------------------

def p_point(p: float, L: float, x, frac: float, tolerance: Optional[float] = None):
    """Axial force from an axial point load p at frac·L."""
    _check_length(L)
    return p * ((1.0 - frac) - heaviside(x, frac * L, L, tolerance))


def m_point(element, p: float, L: float, x, frac: float, tolerance: Optional[float] = None):
    """Bending moment from a transverse point load p at frac·L."""
    _check_length(L)
    x = np.asarray(x, dtype=float)
    a = frac * L
    R1, M1 = point_reactions(element.release, p, L, frac)
    return -M1 + R1 * x - p * (x - a) * heaviside(x, a, L, tolerance)


def v_point(element, p: float, L: float, x, frac: float, tolerance: Optional[float] = None):
    """Shear from a transverse point load p at frac·L."""
    _check_length(L)
    R1, _ = point_reactions(element.release, p, L, frac)
    return R1 - p * heaviside(x, frac * L, L, tolerance)
