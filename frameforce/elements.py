# frameforce/elements.py
"""
3D FRAME ELEMENT: Stiffness, Rotation Basis and End Releases
============================================================

Local DOF order per element (two nodes × 6):

    [u1, v1, w1, rx1, ry1, rz1, u2, v2, w2, rx2, ry2, rz2]

Bending in the local x-y plane (v, rz) uses Iz; bending in the local x-z
plane (w, ry) uses Iy. With the right-hand rule, ry = -dw/dx, which is why
the x-z block carries the opposite sign pattern to the x-y block.

RELEASES:
---------
A released end transmits no bending moment (ry and rz). The element
stiffness is statically condensed on the released rotations, so the
condensed rows/columns are zero and the remaining terms are those of a
propped or simply supported member.
"""

from enum import Enum
from typing import Tuple

import numpy as np


class Release(Enum):
    """Moment release condition at the two ends of an element."""
    FIXED_FIXED = "fixedfixed"        # moments transmitted at both ends
    PINNED_FIXED = "pinnedfixed"      # start end pinned
    FIXED_PINNED = "fixedpinned"      # end pinned
    PINNED_PINNED = "pinnedpinned"    # both ends pinned


# Local DOF indices condensed out for each release
RELEASED_DOFS = {
    Release.FIXED_FIXED: (),
    Release.PINNED_FIXED: (4, 5),
    Release.FIXED_PINNED: (10, 11),
    Release.PINNED_PINNED: (4, 5, 10, 11),
}


def as_release(release) -> Release:
    """Accept a Release or its string value ("fixedfixed", ...)."""
    if isinstance(release, Release):
        return release
    try:
        return Release(release)
    except ValueError:
        valid = ", ".join(r.value for r in Release)
        raise ValueError(f"Unknown release {release!r}; expected one of: {valid}") from None


def release_mask(release: Release) -> np.ndarray:
    """
    12-vector of 0/1 selecting the end-force components that are transmitted.

    >>> release_mask(Release.PINNED_FIXED)[[4, 5]]
    array([0., 0.])
    """
    mask = np.ones(12, dtype=float)
    mask[list(RELEASED_DOFS[release])] = 0.0
    return mask


def frame3d_local_stiffness(
    E: float, G: float, A: float, Iy: float, Iz: float, J: float, L: float
) -> np.ndarray:
    """
    12×12 Euler-Bernoulli space-frame stiffness in local coordinates.

    Parameters:
    -----------
    E, G : float
        Young's and shear modulus (Pa)
    A : float
        Cross-sectional area (m²)
    Iy, Iz : float
        Second moments of area about local y and local z (m⁴)
    J : float
        Torsion constant (m⁴)
    L : float
        Element length (m), must be positive
    """
    if L <= 0.0:
        raise ValueError("length must be positive")

    k = np.zeros((12, 12), dtype=float)

    # axial
    ka = E * A / L
    k[np.ix_([0, 6], [0, 6])] = ka * np.array([[1.0, -1.0], [-1.0, 1.0]])

    # torsion
    kt = G * J / L
    k[np.ix_([3, 9], [3, 9])] = kt * np.array([[1.0, -1.0], [-1.0, 1.0]])

    # bending in x-y plane (v, rz)
    EI = E * Iz
    k1, k2, k3, k4 = 12 * EI / L**3, 6 * EI / L**2, 4 * EI / L, 2 * EI / L
    k[np.ix_([1, 5, 7, 11], [1, 5, 7, 11])] = np.array([
        [ k1,  k2, -k1,  k2],
        [ k2,  k3, -k2,  k4],
        [-k1, -k2,  k1, -k2],
        [ k2,  k4, -k2,  k3],
    ])

    # bending in x-z plane (w, ry)
    EI = E * Iy
    k1, k2, k3, k4 = 12 * EI / L**3, 6 * EI / L**2, 4 * EI / L, 2 * EI / L
    k[np.ix_([2, 4, 8, 10], [2, 4, 8, 10])] = np.array([
        [ k1, -k2, -k1, -k2],
        [-k2,  k3,  k2,  k4],
        [-k1,  k2,  k1,  k2],
        [-k2,  k4,  k2,  k3],
    ])

    return k


def condense_releases(k: np.ndarray, released: Tuple[int, ...]) -> np.ndarray:
    """
    Statically condense released DOFs out of a local stiffness matrix.

        k_cc* = k_cc - k_cr · k_rr⁻¹ · k_rc

    The released rows and columns of the returned 12×12 matrix are zero.
    """
    if not released:
        return k.copy()

    r = np.array(released, dtype=int)
    c = np.array([i for i in range(k.shape[0]) if i not in set(released)], dtype=int)

    k_cc = k[np.ix_(c, c)]
    k_cr = k[np.ix_(c, r)]
    k_rr = k[np.ix_(r, r)]

    condensed = np.zeros_like(k)
    condensed[np.ix_(c, c)] = k_cc - k_cr @ np.linalg.solve(k_rr, k_cr.T)
    return condensed


def local_basis(
    start: np.ndarray,
    end: np.ndarray,
    psi: float = 0.0,
    vertical_tolerance: float = 1e-6,
) -> Tuple[float, np.ndarray]:
    """
    Length and 3×3 global→local rotation of a member.

    Rows of the returned matrix are the local x, y, z axes in global
    coordinates, so v_local = lambda_ @ v_global.

    Local x runs start→end. Local z = x × Y (global Y is up) and local
    y = z × x, which puts local y = global Y for a member along global X.
    Members parallel to Y use -X as the reference instead. `psi` then rolls
    y and z about x (radians).

    Raises:
    -------
    ValueError
        If the two end points coincide.
    """
    d = np.asarray(end, dtype=float) - np.asarray(start, dtype=float)
    L = float(np.linalg.norm(d))
    if L <= 0.0:
        raise ValueError(f"zero-length member between {tuple(start)} and {tuple(end)}")

    x_axis = d / L
    up = np.array([0.0, 1.0, 0.0])
    if abs(abs(float(x_axis @ up)) - 1.0) < vertical_tolerance:
        up = np.array([-1.0, 0.0, 0.0])

    z_axis = np.cross(x_axis, up)
    z_axis /= np.linalg.norm(z_axis)
    y_axis = np.cross(z_axis, x_axis)

    if psi:
        c, s = np.cos(psi), np.sin(psi)
        y_axis, z_axis = c * y_axis + s * z_axis, -s * y_axis + c * z_axis

    return L, np.vstack([x_axis, y_axis, z_axis])


def frame3d_transform(lambda_: np.ndarray) -> np.ndarray:
    """12×12 block-diagonal transform: u_local = T @ u_global."""
    T = np.zeros((12, 12), dtype=float)
    for block in range(4):
        s = slice(3 * block, 3 * block + 3)
        T[s, s] = lambda_
    return T
