# frameforce/kernel - Dimension-agnostic linear analysis core
"""
KERNEL: DOF INDEXING, ASSEMBLY AND LINEAR SOLVE
===============================================

The plumbing a linear static solve needs, independent of element type:
- a way to map (node_id, local_dof) → global_dof_index
- scatter-add of element matrices/vectors into the global system
- a partitioned solve with a conditioning check

Element formulations (3D frame stiffness, rotations, releases) live one
level up in frameforce.elements.
"""

from .dof import DOFManager
from .solve import solve_linear, MechanismError

__all__ = ['DOFManager', 'solve_linear', 'MechanismError']
