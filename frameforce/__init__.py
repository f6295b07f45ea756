# frameforce - Internal force diagrams and envelopes for 3D frames
"""
FRAMEFORCE: Internal Forces of Solved Linear-Elastic Frames
===========================================================

This package provides:
- Axial force, two-axis shear and two-axis moment diagrams along members
- Superposition of line and point loads onto end-force baselines
- Stitched diagrams for members split into several elements
- Min/max envelopes across independent load cases

ARCHITECTURE:
-------------
    kernel/         DOF indexing, assembly, partitioned linear solve
    model.py        Node, Element (3D frame), Model with its load registry
    elements.py     3D stiffness, rotation basis, end releases
    beam_theory.py  Single-load contributions at a cut
    loads.py        LineLoad, PointLoad
    solve.py        Linear static solve of one load case
    post.py         Element end forces, support reactions
    diagrams.py     InternalForces and the samplers
    envelopes.py    ForceEnvelopes and the envelope builder
    settings.py     AnalysisSettings defaults
"""

from .kernel import MechanismError
from .elements import Release
from .model import FIXED, FREE, PINNED, Element, Model, Node
from .loads import ElementLoad, LineLoad, PointLoad
from .solve import Solution, solve
from .diagrams import (
    InternalForces,
    accumulate_force,
    force_summary,
    sample_chain,
    sample_element,
    sample_model,
)
from .envelopes import ForceEnvelopes, build_envelopes, reduce_envelopes
from .settings import AnalysisSettings, SETTINGS

__version__ = "0.1.0"

__all__ = [
    'MechanismError', 'Release',
    'FIXED', 'FREE', 'PINNED', 'Element', 'Model', 'Node',
    'ElementLoad', 'LineLoad', 'PointLoad',
    'Solution', 'solve',
    'InternalForces', 'accumulate_force', 'force_summary',
    'sample_chain', 'sample_element', 'sample_model',
    'ForceEnvelopes', 'build_envelopes', 'reduce_envelopes',
    'AnalysisSettings', 'SETTINGS',
]
