# frameforce/diagrams.py
"""
INTERNAL FORCE DIAGRAMS
=======================

Samples axial force P, bending moments My/Mz and shears Vy/Vz along 3D
frame elements of a solved model.

For one element the diagram is built in two parts:

1. BASELINE from the end forces R·K·u at the start node. With no load
   between the nodes, shear is constant and moment is linear:

       P(x)  = Pstart
       Vy(x) = Vystart          My(x) = Vystart·x - Mystart
       Vz(x) = Vzstart          Mz(x) = Vzstart·x - Mzstart

2. SUPERPOSITION of every load on the element (ElementLoad.contribute),
   added into the baseline arrays.

NAMING:
-------
My and Vy belong to the bending plane with transverse direction local y
(moment vector about local z); Mz and Vz to the plane with transverse
direction local z. Positive P is tension.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .model import Element, Model
from .post import element_end_forces_local
from .settings import AnalysisSettings, SETTINGS

logger = logging.getLogger(__name__)

COMPONENTS = ('P', 'My', 'Vy', 'Mz', 'Vz')

# end-force component and sign for (Pstart, Vystart, Mystart, Vzstart, Mzstart):
# nodal end reactions → internal forces at a cut just right of the start node
START_INDICES = [0, 1, 5, 2, 4]
START_SIGNS = np.array([-1.0, 1.0, 1.0, 1.0, -1.0])


def readonly_array(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class InternalForces:
    """
    Sampled internal forces of one element (or one stitched chain).

    Arrays are copied on construction and read-only afterwards.
    """
    element: Element
    resolution: int
    x: np.ndarray
    P: np.ndarray
    My: np.ndarray
    Vy: np.ndarray
    Mz: np.ndarray
    Vz: np.ndarray

    def __post_init__(self):
        for name in ('x',) + COMPONENTS:
            object.__setattr__(self, name, readonly_array(getattr(self, name)))
        if any(len(getattr(self, name)) != len(self.x) for name in COMPONENTS):
            raise ValueError("force arrays must match the length of x")

    def extrema(self) -> Dict[str, tuple]:
        """(min, max) of each component."""
        return {
            name: (float(np.min(getattr(self, name))), float(np.max(getattr(self, name))))
            for name in COMPONENTS
        }

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({name: getattr(self, name) for name in ('x',) + COMPONENTS})


def check_resolution(resolution: Optional[int], settings: Optional[AnalysisSettings] = None) -> int:
    if resolution is None:
        resolution = (settings or SETTINGS).resolution
    resolution = int(round(resolution))
    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")
    return resolution


def accumulate_force(
    load,
    x: np.ndarray,
    P: np.ndarray,
    My: np.ndarray,
    Vy: np.ndarray,
    Mz: np.ndarray,
    Vz: np.ndarray,
    settings: Optional[AnalysisSettings] = None,
) -> None:
    """
    Add one load's contribution to in-progress diagram arrays, in place.

    Calling it twice for the same load counts the load twice.
    """
    dP, dMy, dVy, dMz, dVz = load.contribute(x, settings)
    P += dP
    My += dMy
    Vy += dVy
    Mz += dMz
    Vz += dVz


def _sample(
    element: Element,
    loads: Iterable,
    resolution: int,
    displacements: Optional[np.ndarray],
    settings: Optional[AnalysisSettings] = None,
):
    """x and the five diagrams of one element, as fresh writable arrays."""
    L = element.length
    x = np.linspace(0.0, L, resolution)

    f_local = element_end_forces_local(element, displacements)
    Pstart, Vystart, Mystart, Vzstart, Mzstart = f_local[START_INDICES] * START_SIGNS

    P = np.full(resolution, Pstart)
    My = Vystart * x - Mystart
    Vy = np.full(resolution, Vystart)
    Mz = Vzstart * x - Mzstart
    Vz = np.full(resolution, Vzstart)

    for load in loads:
        accumulate_force(load, x, P, My, Vy, Mz, Vz, settings)

    return x, P, My, Vy, Mz, Vz


def sample_element(
    element: Element,
    source: Union[Model, Sequence],
    resolution: Optional[int] = None,
    displacements: Optional[np.ndarray] = None,
    settings: Optional[AnalysisSettings] = None,
) -> InternalForces:
    """
    Internal forces at `resolution` evenly spaced points along one element.

    Parameters:
    -----------
    element : Element
        The element to sample
    source : Model or Sequence[ElementLoad]
        A Model (its loads registered on `element` are used) or an explicit
        list of loads bound to `element`
    resolution : int, optional
        Number of samples including both ends (>= 2), default settings.resolution
    displacements : np.ndarray, optional
        Full solution vector to read instead of the node fields
    settings : AnalysisSettings, optional
        Defaults to SETTINGS; supplies resolution and position_tolerance

    Raises:
    -------
    ValueError
        If resolution < 2, the element is not in the given model, or an
        explicit load is bound to another element
    """
    resolution = check_resolution(resolution, settings)

    if isinstance(source, Model):
        loads = source.loads_for(element)
    else:
        loads = list(source)
        for load in loads:
            if load.element is not element:
                raise ValueError(f"{type(load).__name__} is bound to element {load.element.id}, not {element.id}")

    return InternalForces(
        element, resolution, *_sample(element, loads, resolution, displacements, settings)
    )


def sample_chain(
    elements: Sequence[Element],
    model: Model,
    resolution: Optional[int] = None,
    displacements: Optional[np.ndarray] = None,
    settings: Optional[AnalysisSettings] = None,
) -> InternalForces:
    """
    One continuous diagram for an ordered chain of elements forming one member.

    Each segment gets max(round(resolution / n_segments), 2) samples and its
    own registered loads. x is measured along the whole chain, so the
    junction coordinate appears twice (end of one segment, start of the
    next). Values are not blended at junctions.

    The returned `element` is the first segment; `resolution` is the total
    sample count.
    """
    elements = list(elements)
    if not elements:
        raise ValueError("a chain needs at least one element")
    resolution = check_resolution(resolution, settings)
    per_segment = max(int(round(resolution / len(elements))), 2)

    for element in elements:
        if not model.contains(element):
            raise ValueError(f"element {element.id} is not in the model")
    element_load_ids = model.elemental_loads()

    parts = {name: [] for name in ('x',) + COMPONENTS}
    offset = 0.0
    for element in elements:
        loads = [model.loads[i] for i in element_load_ids[element.id]]
        x, P, My, Vy, Mz, Vz = _sample(element, loads, per_segment, displacements, settings)

        parts['x'].append(x + offset)
        for name, values in zip(COMPONENTS, (P, My, Vy, Mz, Vz)):
            parts[name].append(values)
        offset += element.length

    stitched = {name: np.concatenate(chunks) for name, chunks in parts.items()}
    return InternalForces(elements[0], len(stitched['x']), **stitched)


def sample_model(
    model: Model,
    increment: float,
    displacements: Optional[np.ndarray] = None,
    settings: Optional[AnalysisSettings] = None,
) -> List[InternalForces]:
    """
    Internal forces of every element at roughly uniform spacing.

    Each element is sampled at max(round(L / increment), 2) points. Results
    are in model element order.
    """
    if increment <= 0.0:
        raise ValueError(f"increment must be positive, got {increment}")

    loadids = model.elemental_loads()

    results = []
    for element, loadset in zip(model.elements, loadids):
        n = max(int(round(element.length / increment)), 2)
        loads = [model.loads[i] for i in loadset]
        results.append(InternalForces(element, n, *_sample(element, loads, n, displacements, settings)))

    logger.debug("sampled %d elements at increment %g", len(results), increment)
    return results


def force_summary(results: Sequence[InternalForces]) -> Dict:
    """
    Largest absolute value of each component and the element it occurs in.

    Returns:
    --------
    Dict
        'max_P', 'max_My', ... and 'critical_element_P', ... (element ids,
        None when `results` is empty)
    """
    summary = {}
    for name in COMPONENTS:
        peaks = [float(np.max(np.abs(getattr(r, name)))) for r in results]
        if peaks:
            i = int(np.argmax(peaks))
            summary[f"max_{name}"] = peaks[i]
            summary[f"critical_element_{name}"] = results[i].element.id
        else:
            summary[f"max_{name}"] = 0.0
            summary[f"critical_element_{name}"] = None
    return summary
