# tests/test_cantilever.py
"""
TEST: Cantilever Internal Force Diagrams
========================================

A cantilever with a tip load has a textbook answer:

    V(x) = P              (constant)
    M(x) = P·x - P·L      (-PL at the root, zero at the tip)

The same answer must come out whichever way the member points in space,
since diagrams are reported in the member's own axes.
"""

import numpy as np
import pytest

from frameforce import FIXED, Element, Model, Node, PointLoad, sample_element, solve

SECTION = dict(E=200e9, G=80e9, A=0.01, Iy=1e-4, Iz=1e-4, J=2e-4)


def make_cantilever(end):
    model = Model()
    n0 = model.add_node(Node(0.0, 0.0, 0.0, fixity=FIXED))
    n1 = model.add_node(Node(*end))
    beam = model.add_element(Element(n0, n1, **SECTION))
    return model, beam


def test_cantilever_tip_load_diagrams():
    """
    PSEUDOCODE:
    ----------

    SETUP:
        Cantilever along +X, L = 4, 10 N down at the tip

    SOLVE + SAMPLE:
        solve(), then sample at x = 0, 1, 2, 3, 4

    VERIFY:
        - Vy = 10 before the tip; at the tip the load is already included → 0
        - My = 10x - 40
        - nothing in the other plane, no axial force
    """
    model, beam = make_cantilever((4.0, 0.0, 0.0))
    solve(model, [PointLoad(beam, [0.0, -10.0, 0.0], position=1.0)])

    forces = sample_element(beam, model, resolution=5)

    np.testing.assert_allclose(forces.x, [0.0, 1.0, 2.0, 3.0, 4.0])
    np.testing.assert_allclose(forces.Vy, [10.0, 10.0, 10.0, 10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.My, [-40.0, -30.0, -20.0, -10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.P, 0.0, atol=1e-6)
    np.testing.assert_allclose(forces.Vz, 0.0, atol=1e-6)
    np.testing.assert_allclose(forces.Mz, 0.0, atol=1e-6)

    print(f"\nroot moment {forces.My[0]:.3f} (expected -40.0)")


def test_cantilever_out_of_plane_load():
    model, beam = make_cantilever((4.0, 0.0, 0.0))
    solve(model, [PointLoad(beam, [0.0, 0.0, -10.0], position=1.0)])

    forces = sample_element(beam, model, resolution=5)

    np.testing.assert_allclose(forces.Vz, [10.0, 10.0, 10.0, 10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.Mz, [-40.0, -30.0, -20.0, -10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.My, 0.0, atol=1e-6)


def test_cantilever_axial_tension():
    model, beam = make_cantilever((4.0, 0.0, 0.0))
    solve(model, [PointLoad(beam, [10.0, 0.0, 0.0], position=1.0)])

    forces = sample_element(beam, model, resolution=5)

    np.testing.assert_allclose(forces.P, [10.0, 10.0, 10.0, 10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.Vy, 0.0, atol=1e-6)


@pytest.mark.parametrize("end, value", [
    ((0.0, 0.0, 4.0), [0.0, -10.0, 0.0]),   # along Z, local y = global Y
    ((0.0, 4.0, 0.0), [10.0, 0.0, 0.0]),    # vertical, local y = global -X
])
def test_orientation_does_not_change_diagrams(end, value):
    model, beam = make_cantilever(end)
    solve(model, [PointLoad(beam, value, position=1.0)])

    forces = sample_element(beam, model, resolution=5)

    np.testing.assert_allclose(forces.Vy, [10.0, 10.0, 10.0, 10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.My, [-40.0, -30.0, -20.0, -10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.Mz, 0.0, atol=1e-6)


def test_inclined_cantilever():
    """Member in the XZ plane, L = 5: gravity is purely transverse."""
    model, beam = make_cantilever((3.0, 0.0, 4.0))
    solve(model, [PointLoad(beam, [0.0, -10.0, 0.0], position=1.0)])

    forces = sample_element(beam, model, resolution=6)

    np.testing.assert_allclose(forces.x, np.arange(6.0))
    np.testing.assert_allclose(forces.My, [-50.0, -40.0, -30.0, -20.0, -10.0, 0.0], atol=1e-6)
    np.testing.assert_allclose(forces.P, 0.0, atol=1e-6)


def test_fully_restrained_member_midspan_load():
    """
    Both ends held: no free DOFs, so the diagrams are the restrained-beam
    contributions alone (±PL/8 moments, half the load in each half).
    """
    model = Model()
    n0 = model.add_node(Node(0.0, 0.0, 0.0, fixity=FIXED))
    n1 = model.add_node(Node(4.0, 0.0, 0.0, fixity=FIXED))
    beam = model.add_element(Element(n0, n1, **SECTION))

    solve(model, [PointLoad(beam, [10.0, -10.0, 0.0], position=0.5)])
    forces = sample_element(beam, model, resolution=5)

    np.testing.assert_allclose(forces.Vy, [5.0, 5.0, -5.0, -5.0, -5.0], atol=1e-9)
    np.testing.assert_allclose(forces.My, [-5.0, 0.0, 5.0, 0.0, -5.0], atol=1e-9)
    np.testing.assert_allclose(forces.P, [5.0, 5.0, -5.0, -5.0, -5.0], atol=1e-9)
