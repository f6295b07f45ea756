# frameforce/model.py
"""
MODEL: Nodes, 3D Frame Elements and the Load Registry
=====================================================

A Model owns ordered lists of nodes, elements and loads. Ids are positions
in those lists and are assigned by the Model when an object is added:

    model = Model()
    n0 = model.add_node(Node(0.0, 0.0, 0.0, fixity=FIXED))
    n1 = model.add_node(Node(4.0, 0.0, 0.0))
    beam = model.add_element(Element(n0, n1, E=200e9, G=80e9, A=0.01,
                                     Iy=1e-4, Iz=1e-4, J=2e-4))
    model.add_load(PointLoad(beam, [0.0, -10e3, 0.0], position=1.0))

The load registry is bidirectional: every registered load's id is listed in
its element's `load_ids`. Node `displacement` and `reaction` are written by
frameforce.solve.solve.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .elements import (
    RELEASED_DOFS,
    Release,
    as_release,
    condense_releases,
    frame3d_local_stiffness,
    frame3d_transform,
    local_basis,
    release_mask,
)
from .settings import SETTINGS

# Node fixity presets, order (ux, uy, uz, rx, ry, rz); True = restrained
FIXED = (True,) * 6
PINNED = (True, True, True, False, False, False)
FREE = (False,) * 6


@dataclass(eq=False)
class Node:
    """
    A joint in 3D space with its solved state.

    Parameters:
    -----------
    x, y, z : float
        Global coordinates (m). Global Y is up.
    fixity : Tuple[bool, ...]
        Six restraint flags (ux, uy, uz, rx, ry, rz)
    """
    x: float
    y: float
    z: float
    fixity: Tuple[bool, ...] = FREE
    id: int = -1
    displacement: np.ndarray = field(default_factory=lambda: np.zeros(6))
    reaction: np.ndarray = field(default_factory=lambda: np.zeros(6))

    def __post_init__(self):
        self.fixity = tuple(bool(f) for f in self.fixity)
        if len(self.fixity) != 6:
            raise ValueError(f"fixity needs 6 flags, got {len(self.fixity)}")

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(eq=False)
class Element:
    """
    3D Euler-Bernoulli frame element between two nodes.

    The geometric and stiffness operators are derived once, on construction:

    - length : float, L > 0
    - lambda_ : 3×3 global→local rotation (rows are local x, y, z)
    - R : 12×12 block-diagonal rotation applied to both nodal triads
    - k_local : 12×12 local stiffness, condensed for releases
    - K : 12×12 global stiffness, Rᵀ · k_local · R
    - release_mask : 12-vector of 0/1 over transmitted end-force components

    `id` and `load_ids` are maintained by the owning Model.
    """
    node_start: Node
    node_end: Node
    E: float
    G: float
    A: float
    Iy: float
    Iz: float
    J: float
    release: Release = Release.FIXED_FIXED
    psi: float = 0.0
    id: int = -1
    load_ids: List[int] = field(default_factory=list)

    length: float = field(init=False)
    lambda_: np.ndarray = field(init=False, repr=False)
    R: np.ndarray = field(init=False, repr=False)
    k_local: np.ndarray = field(init=False, repr=False)
    K: np.ndarray = field(init=False, repr=False)
    release_mask: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.release = as_release(self.release)
        self.length, self.lambda_ = local_basis(
            self.node_start.position,
            self.node_end.position,
            self.psi,
            SETTINGS.vertical_tolerance,
        )
        self.R = frame3d_transform(self.lambda_)
        k = frame3d_local_stiffness(self.E, self.G, self.A, self.Iy, self.Iz, self.J, self.length)
        self.k_local = condense_releases(k, RELEASED_DOFS[self.release])
        self.K = self.R.T @ self.k_local @ self.R
        self.release_mask = release_mask(self.release)


class Model:
    """Ordered container of nodes, elements and the active load set."""

    def __init__(self):
        self.nodes: List[Node] = []
        self.elements: List[Element] = []
        self.loads: list = []

    def add_node(self, node: Node) -> Node:
        node.id = len(self.nodes)
        self.nodes.append(node)
        return node

    def add_element(self, element: Element) -> Element:
        for node in (element.node_start, element.node_end):
            if not (0 <= node.id < len(self.nodes) and self.nodes[node.id] is node):
                raise ValueError("element references a node that is not in the model")
        element.id = len(self.elements)
        element.load_ids = []
        self.elements.append(element)
        return element

    def contains(self, element: Element) -> bool:
        return 0 <= element.id < len(self.elements) and self.elements[element.id] is element

    def add_load(self, load):
        """
        Register a load and record its id on its element.

        Raises:
        -------
        ValueError
            If the load's element is not part of this model.
        """
        if not self.contains(load.element):
            raise ValueError(
                f"{type(load).__name__} is bound to an element that is not in the model"
            )
        load.load_id = len(self.loads)
        self.loads.append(load)
        load.element.load_ids.append(load.load_id)
        return load

    def clear_loads(self) -> None:
        for load in self.loads:
            load.load_id = None
        self.loads = []
        for element in self.elements:
            element.load_ids = []

    def set_loads(self, loads: Sequence) -> None:
        """Replace the active load set (one load case)."""
        loads = list(loads)
        for load in loads:
            if not self.contains(load.element):
                raise ValueError(
                    f"{type(load).__name__} is bound to an element that is not in the model"
                )
        self.clear_loads()
        for load in loads:
            self.add_load(load)

    def loads_for(self, element: Element) -> list:
        if not self.contains(element):
            raise ValueError(f"element {element.id} is not in the model")
        return [self.loads[i] for i in element.load_ids]

    def elemental_loads(self) -> List[List[int]]:
        """
        Element → assigned load ids, one list per element in model order.

        Built from the load registry in a single pass.
        """
        element_to_loadids: List[List[int]] = [[] for _ in self.elements]
        for load in self.loads:
            element_to_loadids[load.element.id].append(load.load_id)
        return element_to_loadids

