#!/usr/bin/env python3
"""
Inter-Satellite Link Resolution

Decides which satellite pairs hold a crosslink at one instant. Every call
starts from scratch: visibility has no memory of earlier calls.

Cost is O(N²): all N(N-1)/2 candidate pairs are distance-checked per call
(2145 for the 66-satellite Iridium constellation). candidate_pairs() is the
single place that enumerates pairs, so a spatial index can replace it
without changing the resolver's contract.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Sequence, Tuple, TYPE_CHECKING

from .config import ConstellationConfig, LinkPolicy

if TYPE_CHECKING:
    from .engine import SatelliteState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkEdge:
    """
    An unordered satellite pair stored as flat indices with i < j.

    Attributes
    ----------
    i : int
        Lower flat index.
    j : int
        Higher flat index.
    visible : bool
        Whether the pair is linked under the active policy.
    distance : float
        Separation in km (not part of equality).
    """

    i: int
    j: int
    visible: bool = True
    distance: float = field(default=0.0, compare=False)

    def __post_init__(self):
        if self.i >= self.j:
            raise ValueError(f"LinkEdge requires i < j, got ({self.i}, {self.j})")

    @classmethod
    def between(cls, a: int, b: int, visible: bool = True, distance: float = 0.0) -> "LinkEdge":
        """Create an edge in canonical order regardless of argument order."""
        i, j = (a, b) if a < b else (b, a)
        return cls(i=i, j=j, visible=visible, distance=distance)

    @property
    def pair(self) -> Tuple[int, int]:
        """The (i, j) flat index pair."""
        return self.i, self.j


def planes_adjacent(plane_a: int, plane_b: int, num_planes: int) -> bool:
    """
    Same plane, or neighbouring planes with wrap-around.

    With 6 planes, plane 0 neighbours planes 1 and 5.
    """
    gap = abs(plane_a - plane_b)
    return gap == 0 or gap == 1 or gap == num_planes - 1


def candidate_pairs(n: int) -> Iterator[Tuple[int, int]]:
    """All (i, j) position pairs with i < j; N(N-1)/2 of them."""
    for i in range(n):
        for j in range(i + 1, n):
            yield i, j


def pairwise_distances(states: Sequence["SatelliteState"]) -> np.ndarray:
    """
    Calculate distances between all satellite pairs.

    Returns
    -------
    np.ndarray
        Symmetric NxN matrix of distances in km.
    """
    if not states:
        return np.zeros((0, 0))
    positions = np.array([state.position for state in states], dtype=float)
    deltas = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    return np.linalg.norm(deltas, axis=-1)


def _pair_allowed(
    policy: LinkPolicy,
    state_a: "SatelliteState",
    state_b: "SatelliteState",
    num_planes: int,
) -> bool:
    """Topological part of the policy (distance is checked separately)."""
    if policy == LinkPolicy.DISTANCE_ONLY:
        return True
    if policy == LinkPolicy.PLANE_ADJACENT:
        return planes_adjacent(state_a.index.plane, state_b.index.plane, num_planes)
    return False


def evaluate_links(
    config: ConstellationConfig,
    states: Sequence["SatelliteState"],
) -> List[LinkEdge]:
    """
    Tag every candidate pair as visible or not.

    Parameters
    ----------
    config : ConstellationConfig
        Supplies max_link_distance, num_planes and link_policy.
    states : sequence of SatelliteState
        Satellite positions for one instant.

    Returns
    -------
    list
        One LinkEdge per pair, ordered by (i, j).
    """
    distances = pairwise_distances(states)
    policy = config.link_policy
    edges: List[LinkEdge] = []

    for a, b in candidate_pairs(len(states)):
        state_a, state_b = states[a], states[b]
        d = float(distances[a, b])

        visible = (
            d <= config.max_link_distance
            and _pair_allowed(policy, state_a, state_b, config.num_planes)
        )

        edges.append(
            LinkEdge.between(state_a.index.flat, state_b.index.flat, visible, d)
        )

    edges.sort(key=lambda edge: edge.pair)
    return edges


def resolve_links(
    config: ConstellationConfig,
    states: Sequence["SatelliteState"],
) -> FrozenSet[LinkEdge]:
    """
    Visible crosslinks for one instant.

    Returns
    -------
    frozenset
        LinkEdge objects (all with visible=True).
    """
    links = frozenset(edge for edge in evaluate_links(config, states) if edge.visible)
    logger.debug(
        f"Resolved {len(links)} links from {len(states) * (len(states) - 1) // 2} "
        f"pairs ({config.link_policy.value})"
    )
    return links
