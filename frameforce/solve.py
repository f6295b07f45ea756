# frameforce/solve.py
"""
Linear static solve of a Model for one load case.

Element loads enter the global load vector as equivalent nodal loads: the
negated restrained end reactions of each load, rotated to global. Node
displacements and reactions are written back into the model, and the same
state is returned as an independent Solution snapshot.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .kernel import DOFManager, solve_linear
from .kernel.assemble import assemble_global_F, assemble_global_K
from .model import Model
from .settings import AnalysisSettings, SETTINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Solution:
    """Displacement/reaction state of one solve, owned by the caller."""
    displacements: np.ndarray   # (6 × n_nodes,)
    reactions: np.ndarray       # (6 × n_nodes,)
    free: np.ndarray            # free DOF indices


def equivalent_nodal_loads(model: Model, dof: DOFManager) -> np.ndarray:
    """Global load vector from every registered element load."""
    contributions = []
    for load in model.loads:
        element = load.element
        fe = -(element.R.T @ load.fixed_end_forces())
        contributions.append((dof.element_dof_map([element.node_start.id, element.node_end.id]), fe))
    return assemble_global_F(dof.ndof(len(model.nodes)), contributions)


def solve(
    model: Model,
    loads: Optional[Sequence] = None,
    settings: Optional[AnalysisSettings] = None,
) -> Solution:
    """
    Solve K·d = F for the model's active loads.

    Parameters:
    -----------
    model : Model
        Model to solve; node displacement/reaction fields are overwritten
    loads : Sequence[ElementLoad], optional
        When given, replaces the model's load set before solving
    settings : AnalysisSettings, optional
        Defaults to SETTINGS

    Returns:
    --------
    Solution
        Copies of the full displacement and reaction vectors

    Raises:
    -------
    MechanismError
        If supports and releases leave the structure unstable
    """
    settings = settings or SETTINGS
    settings.validate()

    if loads is not None:
        model.set_loads(loads)

    dof = DOFManager(dof_per_node=6)
    ndof = dof.ndof(len(model.nodes))

    contributions = [
        (dof.element_dof_map([e.node_start.id, e.node_end.id]), e.K)
        for e in model.elements
    ]
    K = assemble_global_K(ndof, contributions)
    F = equivalent_nodal_loads(model, dof)

    fixed = [
        dof.idx(node.id, i)
        for node in model.nodes
        for i, restrained in enumerate(node.fixity)
        if restrained
    ]
    logger.debug(
        "solving %d nodes, %d elements, %d loads (%d DOFs, %d fixed)",
        len(model.nodes), len(model.elements), len(model.loads), ndof, len(fixed),
    )

    d, R, free = solve_linear(K, F, fixed, cond_limit=settings.cond_limit)

    for node in model.nodes:
        dofs = dof.node_dofs(node.id)
        node.displacement = d[dofs].copy()
        node.reaction = R[dofs].copy()

    return Solution(displacements=d.copy(), reactions=R.copy(), free=free)
