# tests/test_elements.py
"""
3D frame element operators: stiffness, rotation basis, releases.
"""

import numpy as np
import pytest

from frameforce.elements import (
    Release,
    as_release,
    condense_releases,
    frame3d_local_stiffness,
    local_basis,
    release_mask,
    RELEASED_DOFS,
)
from frameforce.model import Element, Model, Node

E, G, A, Iy, Iz, J = 200e9, 80e9, 0.01, 2e-4, 1e-4, 3e-4


def test_local_stiffness_terms():
    L = 2.0
    k = frame3d_local_stiffness(E, G, A, Iy, Iz, J, L)

    np.testing.assert_allclose(k, k.T, rtol=1e-12)
    assert np.isclose(k[0, 0], E * A / L)
    assert np.isclose(k[3, 9], -G * J / L)
    assert np.isclose(k[1, 1], 12 * E * Iz / L**3)
    assert np.isclose(k[2, 2], 12 * E * Iy / L**3)
    # x-y and x-z planes carry opposite coupling signs
    assert k[1, 5] > 0.0
    assert k[2, 4] < 0.0


def test_local_stiffness_rejects_zero_length():
    with pytest.raises(ValueError, match="length"):
        frame3d_local_stiffness(E, G, A, Iy, Iz, J, 0.0)


def test_condensation_zeroes_released_dofs():
    L = 3.0
    k = frame3d_local_stiffness(E, G, A, Iy, Iz, J, L)
    kc = condense_releases(k, RELEASED_DOFS[Release.PINNED_FIXED])

    np.testing.assert_allclose(kc[[4, 5], :], 0.0)
    np.testing.assert_allclose(kc[:, [4, 5]], 0.0)
    np.testing.assert_allclose(kc, kc.T, rtol=1e-10, atol=1e-3)

    # propped cantilever: transverse stiffness at the pinned end is 3EI/L³
    assert np.isclose(kc[1, 1], 3 * E * Iz / L**3)
    assert np.isclose(kc[2, 2], 3 * E * Iy / L**3)
    # axial and torsion are untouched
    assert np.isclose(kc[0, 0], k[0, 0])
    assert np.isclose(kc[3, 3], k[3, 3])


def test_release_masks():
    np.testing.assert_array_equal(release_mask(Release.FIXED_FIXED), np.ones(12))
    mask = release_mask(Release.PINNED_PINNED)
    assert mask.sum() == 8
    np.testing.assert_array_equal(mask[[4, 5, 10, 11]], 0.0)


def test_release_from_string():
    assert as_release("fixedpinned") is Release.FIXED_PINNED
    with pytest.raises(ValueError, match="Unknown release"):
        as_release("hinged")


def test_basis_along_global_x_is_identity():
    L, lam = local_basis([0, 0, 0], [5, 0, 0])
    assert L == 5.0
    np.testing.assert_allclose(lam, np.eye(3), atol=1e-12)


def test_basis_vertical_member():
    _, lam = local_basis([0, 0, 0], [0, 3, 0])
    np.testing.assert_allclose(lam[0], [0, 1, 0], atol=1e-12)
    np.testing.assert_allclose(lam[1], [-1, 0, 0], atol=1e-12)
    np.testing.assert_allclose(lam[2], [0, 0, 1], atol=1e-12)


def test_basis_is_orthonormal_and_right_handed():
    _, lam = local_basis([1.0, -2.0, 0.5], [4.0, 3.0, -1.5], psi=0.3)
    np.testing.assert_allclose(lam @ lam.T, np.eye(3), atol=1e-12)
    assert np.isclose(np.linalg.det(lam), 1.0)


def test_basis_roll_angle():
    _, lam = local_basis([0, 0, 0], [2, 0, 0], psi=np.pi / 2)
    np.testing.assert_allclose(lam[1], [0, 0, 1], atol=1e-12)
    np.testing.assert_allclose(lam[2], [0, -1, 0], atol=1e-12)


def test_zero_length_element_rejected():
    model = Model()
    n0 = model.add_node(Node(1.0, 1.0, 1.0))
    n1 = model.add_node(Node(1.0, 1.0, 1.0))
    with pytest.raises(ValueError, match="zero-length"):
        Element(n0, n1, E=E, G=G, A=A, Iy=Iy, Iz=Iz, J=J)


def test_element_global_stiffness_rotation():
    """K = Rᵀ k R, so R K Rᵀ gives back the local matrix."""
    model = Model()
    n0 = model.add_node(Node(0.0, 0.0, 0.0))
    n1 = model.add_node(Node(0.0, 4.0, 3.0))
    e = model.add_element(Element(n0, n1, E=E, G=G, A=A, Iy=Iy, Iz=Iz, J=J, release="pinnedpinned"))

    assert e.release is Release.PINNED_PINNED
    assert e.length == 5.0
    np.testing.assert_allclose(e.R @ e.K @ e.R.T, e.k_local, atol=1e-3)
