# frameforce/envelopes.py
"""
FORCE ENVELOPES ACROSS LOAD CASES
=================================

For each load case the model is solved and every element sampled at the
same spatial increment. Because resolution depends only on element length
and increment, the i-th sample of an element refers to the same x in every
case, so envelopes are elementwise min/max over the stacked cases.

Each case is sampled from its own Solution snapshot, not from the node
fields that the next solve overwrites.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .diagrams import COMPONENTS, InternalForces, readonly_array, sample_model
from .model import Element, Model
from .settings import AnalysisSettings
from .solve import solve

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ForceEnvelopes:
    """Low/high bounds of each internal force component along one element."""
    element: Element
    resolution: int
    x: np.ndarray
    P_low: np.ndarray
    P_high: np.ndarray
    My_low: np.ndarray
    My_high: np.ndarray
    Vy_low: np.ndarray
    Vy_high: np.ndarray
    Mz_low: np.ndarray
    Mz_high: np.ndarray
    Vz_low: np.ndarray
    Vz_high: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'x', readonly_array(self.x))
        for name in COMPONENTS:
            low = readonly_array(getattr(self, f"{name}_low"))
            high = readonly_array(getattr(self, f"{name}_high"))
            if low.shape != self.x.shape or high.shape != self.x.shape:
                raise ValueError(f"{name} bounds must match the length of x")
            if np.any(low > high):
                raise ValueError(f"{name} low bound exceeds high bound")
            object.__setattr__(self, f"{name}_low", low)
            object.__setattr__(self, f"{name}_high", high)

    def bounds(self, component: str):
        """(low, high) arrays of one component, e.g. bounds('My')."""
        if component not in COMPONENTS:
            raise KeyError(component)
        return getattr(self, f"{component}_low"), getattr(self, f"{component}_high")

    def to_frame(self) -> pd.DataFrame:
        columns = {'x': self.x}
        for name in COMPONENTS:
            columns[f"{name}_low"], columns[f"{name}_high"] = self.bounds(name)
        return pd.DataFrame(columns)


def reduce_envelopes(results_per_case: Sequence[Sequence[InternalForces]]) -> List[ForceEnvelopes]:
    """
    Elementwise min/max over cases.

    Parameters:
    -----------
    results_per_case : Sequence[Sequence[InternalForces]]
        One list of InternalForces per load case, each in the same element order

    Raises:
    -------
    ValueError
        If there are no cases, or cases differ in element count, in the
        element at a given position, or in an element's resolution
    """
    if not results_per_case:
        raise ValueError("at least one load case is required")

    first = results_per_case[0]
    for case_index, results in enumerate(results_per_case):
        if len(results) != len(first):
            raise ValueError(
                f"load case {case_index} has {len(results)} elements, expected {len(first)}"
            )
        for i, (r, r0) in enumerate(zip(results, first)):
            if r.element is not r0.element:
                raise ValueError(
                    f"load case {case_index}: position {i} holds element {r.element.id}, "
                    f"not the element sampled in load case 0"
                )
            if r.resolution != r0.resolution:
                raise ValueError(
                    f"load case {case_index}: element {i} sampled at {r.resolution} points, "
                    f"expected {r0.resolution}"
                )

    envelopes = []
    for i, reference in enumerate(first):
        bounds = {}
        for name in COMPONENTS:
            stacked = np.vstack([getattr(results[i], name) for results in results_per_case])
            bounds[f"{name}_low"] = stacked.min(axis=0)
            bounds[f"{name}_high"] = stacked.max(axis=0)

        envelopes.append(ForceEnvelopes(
            element=reference.element,
            resolution=reference.resolution,
            x=reference.x,
            **bounds,
        ))

    return envelopes


def build_envelopes(
    model: Model,
    load_cases: Sequence[Sequence],
    increment: float,
    settings: Optional[AnalysisSettings] = None,
) -> List[ForceEnvelopes]:
    """
    Solve each load case and envelope the sampled internal forces.

    Parameters:
    -----------
    model : Model
        Structural model; its active load set is replaced case by case and
        ends up holding the last case
    load_cases : Sequence[Sequence[ElementLoad]]
        Independent load cases, each a collection of loads on model elements
    increment : float
        Sampling spacing passed to sample_model

    Returns:
    --------
    List[ForceEnvelopes]
        One per model element, in model element order
    """
    load_cases = [list(case) for case in load_cases]
    if not load_cases:
        raise ValueError("at least one load case is required")

    logger.info("building envelopes over %d load cases", len(load_cases))

    forceresults = []
    for index, case in enumerate(load_cases):
        solution = solve(model, case, settings)
        forceresults.append(
            sample_model(model, increment, displacements=solution.displacements, settings=settings)
        )
        logger.debug("load case %d: %d loads solved and sampled", index, len(case))

    return reduce_envelopes(forceresults)
