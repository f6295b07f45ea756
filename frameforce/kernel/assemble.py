# frameforce/kernel/assemble.py
"""
ASSEMBLY: Global Matrix and Load Vector Scatter-Add
===================================================

Both functions take a list of (dof_map, local_contribution) pairs, where
dof_map comes from DOFManager.element_dof_map and the contribution is
already expressed in GLOBAL coordinates:

    contributions = [(dof.element_dof_map([e.node_start.id, e.node_end.id]), e.K)
                     for e in model.elements]
    K = assemble_global_K(dof.ndof(len(model.nodes)), contributions)
"""

import numpy as np
from typing import List, Tuple


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs (6 × n_nodes for a 3D frame)
    contributions : List[Tuple[List[int], np.ndarray]]
        (dof_map, ke) per element, ke of shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        K, shape (ndof, ndof)
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)
        assert ke.shape == (n_element_dofs, n_element_dofs), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"

        idx = np.asarray(dof_map, dtype=int)
        K[np.ix_(idx, idx)] += ke

    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global load vector from element equivalent nodal loads.

    Same scatter-add as assemble_global_K. Repeated DOFs accumulate.
    """
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n_element_dofs = len(dof_map)
        assert fe.shape == (n_element_dofs,), \
            f"Element fe shape {fe.shape} doesn't match dof_map length {n_element_dofs}"

        np.add.at(F, np.asarray(dof_map, dtype=int), fe)

    return F
