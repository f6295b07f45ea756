# frameforce/kernel/dof.py
"""
DOF MANAGER
===========

Maps "node 5, rotation about y" to a global DOF index.

A 3D frame node carries 6 DOFs in the order:

    0: ux   1: uy   2: uz   3: rx   4: ry   5: rz

USAGE:
------
    dof = DOFManager(dof_per_node=6)
    dof.idx(node_id=2, local_dof=1)      # → 13
    dof.element_dof_map([0, 3])          # → [0..5, 18..23]
"""

from dataclasses import dataclass
from typing import List


@dataclass
class DOFManager:
    """
    Degree-of-freedom indexing for a model whose nodes are numbered 0..n-1.

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=6)
    >>> dof.idx(1, 0)
    6
    >>> dof.ndof(4)
    24
    """
    dof_per_node: int = 6

    def idx(self, node_id: int, local_dof: int) -> int:
        """Global index of a node's local DOF."""
        return self.dof_per_node * node_id + local_dof

    def ndof(self, n_nodes: int) -> int:
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_id: int) -> List[int]:
        """
        All global DOF indices of one node.

        >>> DOFManager(6).node_dofs(2)
        [12, 13, 14, 15, 16, 17]
        """
        base = self.dof_per_node * node_id
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: List[int]) -> List[int]:
        """
        Flattened DOF indices for an element connecting `node_ids`, in node order.

        This is the gather/scatter map between a 12×12 element matrix and
        the global system.
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result
