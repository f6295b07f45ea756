# frameforce/post.py
"""Element end forces and support reactions from a solved state."""

from typing import Dict, Optional

import numpy as np

from .model import Element, Model


def element_displacements_global(
    element: Element,
    displacements: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    12-vector of the element's nodal displacements in global coordinates.

    Reads node.displacement, or the matching slice of a full solution
    vector when `displacements` is given.
    """
    if displacements is None:
        return np.concatenate([element.node_start.displacement, element.node_end.displacement])

    d = np.asarray(displacements, dtype=float)
    i, j = element.node_start.id, element.node_end.id
    return np.concatenate([d[6 * i:6 * i + 6], d[6 * j:6 * j + 6]])


def element_end_forces_local(
    element: Element,
    displacements: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Local end forces transmitted by the element: (R · K · u) masked by releases.

    Returns:
    --------
    np.ndarray
        Shape (12,): [Fx1, Fy1, Fz1, Mx1, My1, Mz1, Fx2, ..., Mz2], the
        forces the nodes exert on the element due to its deformation only.
        Restrained-load reactions are not included.
    """
    u = element_displacements_global(element, displacements)
    return (element.R @ element.K @ u) * element.release_mask


def compute_reactions(model: Model) -> Dict[int, Dict[str, float]]:
    """
    Support reactions per restrained node, from the last solve.

    Returns:
    --------
    Dict[int, Dict[str, float]]
        node_id → {'Fx', 'Fy', 'Fz', 'Mx', 'My', 'Mz'}; unrestrained
        components are 0.0
    """
    names = ('Fx', 'Fy', 'Fz', 'Mx', 'My', 'Mz')
    result = {}
    for node in model.nodes:
        if not any(node.fixity):
            continue
        result[node.id] = {
            name: float(node.reaction[i]) if node.fixity[i] else 0.0
            for i, name in enumerate(names)
        }
    return result
