#!/usr/bin/env python3
"""
Constellation Geometry Engine

Composes propagation, footprint projection and link resolution into one
evaluation per instant. The engine holds only the configuration and the
per-plane orbits derived from it; the current time is always an argument.

Usage:
    engine = ConstellationEngine(create_iridium_config())
    frame = engine.compute_frame(elapsed_minutes=12.5)
    frame.is_linked(0, 11)
"""

import logging
import numpy as np
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .clock import elapsed_minutes_from_datetime
from .config import ConstellationConfig, SatelliteIndex
from .footprint import DEFAULT_WORLD_UP, CoverageFootprint, project
from .links import LinkEdge, evaluate_links, resolve_links
from .orbit import CircularOrbit, phase_offset
from .vector import to_render_frame


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SatelliteState:
    """
    Position of one satellite at one instant.

    Attributes
    ----------
    index : SatelliteIndex
        Plane, in-plane and flat index.
    position : np.ndarray
        World-frame position (km).
    """

    index: SatelliteIndex
    position: np.ndarray

    @property
    def radius(self) -> float:
        """Distance from the body center (km)."""
        return float(np.linalg.norm(self.position))

    def altitude_above(self, body_radius: float) -> float:
        """Height above a spherical body of the given radius (km)."""
        return self.radius - body_radius

    def render_position(self, body_radius: float) -> np.ndarray:
        """Position in body radii."""
        return to_render_frame(self.position, body_radius)

    def __repr__(self) -> str:
        x, y, z = self.position
        return f"SatelliteState({self.index}, pos=({x:.1f}, {y:.1f}, {z:.1f}) km)"


@dataclass(frozen=True, eq=False)
class Frame:
    """
    Geometry of the whole constellation at one instant.

    Attributes
    ----------
    elapsed_minutes : float
        Time the frame was evaluated at.
    satellites : tuple
        SatelliteState per satellite, in flat index order.
    footprints : tuple
        CoverageFootprint per satellite, index-aligned with satellites.
    edges : tuple
        Every candidate LinkEdge, tagged visible or not.
    links : frozenset
        The visible subset of edges.
    """

    elapsed_minutes: float
    satellites: Tuple[SatelliteState, ...]
    footprints: Tuple[CoverageFootprint, ...]
    edges: Tuple[LinkEdge, ...]
    links: FrozenSet[LinkEdge]

    @property
    def link_count(self) -> int:
        """Number of visible links."""
        return len(self.links)

    def is_linked(self, a: int, b: int) -> bool:
        """Whether flat indices a and b are linked (order does not matter)."""
        if a == b:
            return False
        return LinkEdge.between(a, b) in self.links

    def links_of(self, flat: int) -> List[int]:
        """Flat indices of satellites linked to `flat`."""
        neighbors = []
        for edge in self.links:
            if edge.i == flat:
                neighbors.append(edge.j)
            elif edge.j == flat:
                neighbors.append(edge.i)
        return sorted(neighbors)

    def summary(self) -> Dict[str, Any]:
        """Frame summary."""
        visible = [edge.distance for edge in self.links]
        return {
            "elapsed_minutes": self.elapsed_minutes,
            "num_satellites": len(self.satellites),
            "candidate_pairs": len(self.edges),
            "visible_links": self.link_count,
            "min_link_distance": min(visible) if visible else None,
            "max_link_distance": max(visible) if visible else None,
        }


class ConstellationEngine:
    """
    Stateless geometry evaluation for a constellation.

    Parameters
    ----------
    config : ConstellationConfig
        Validated constellation configuration.
    world_up : array-like
        Reference direction used to fix the roll of coverage discs.

    Attributes
    ----------
    config : ConstellationConfig
        The configuration in use.
    orbits : list
        One CircularOrbit per plane.
    """

    def __init__(
        self,
        config: Optional[ConstellationConfig] = None,
        world_up=DEFAULT_WORLD_UP,
    ):
        self.config = config or ConstellationConfig()
        self.world_up = world_up
        self.orbits: List[CircularOrbit] = [
            CircularOrbit.for_plane(self.config, plane)
            for plane in range(self.config.num_planes)
        ]
        self.indices: List[SatelliteIndex] = self.config.all_indices()

        logger.info(
            f"Constellation engine ready: {self.config.num_planes} planes x "
            f"{self.config.sats_per_plane} satellites, "
            f"policy={self.config.link_policy.value}, "
            f"{self.comparisons_per_frame} pair checks per frame"
        )

    @property
    def num_satellites(self) -> int:
        """Number of satellites."""
        return self.config.num_satellites

    @property
    def comparisons_per_frame(self) -> int:
        """Pairwise distance checks done by every link resolution."""
        return self.config.candidate_pair_count

    def propagate(self, plane_index: int, sat_index: int, elapsed_minutes: float) -> np.ndarray:
        """World-frame position (km) of one satellite."""
        index = self.config.satellite_index(plane_index, sat_index)
        orbit = self.orbits[index.plane]
        return orbit.position_at_time(elapsed_minutes, phase_offset(self.config, index.sat))

    def propagate_all(self, elapsed_minutes: float) -> List[SatelliteState]:
        """
        Positions of every satellite, in flat index order.

        Parameters
        ----------
        elapsed_minutes : float
            Time since the reference epoch (minutes).

        Returns
        -------
        list
            SatelliteState per satellite.
        """
        states = []
        for index in self.indices:
            orbit = self.orbits[index.plane]
            position = orbit.position_at_time(
                elapsed_minutes, phase_offset(self.config, index.sat)
            )
            states.append(SatelliteState(index=index, position=position))
        return states

    def project_footprints(self, states: List[SatelliteState]) -> List[CoverageFootprint]:
        """Coverage footprint per state, index-aligned."""
        return [project(state.position, state.index, self.world_up) for state in states]

    def evaluate_links(self, states: List[SatelliteState]) -> List[LinkEdge]:
        """Every candidate pair tagged visible or not."""
        return evaluate_links(self.config, states)

    def resolve_links(self, states: List[SatelliteState]) -> FrozenSet[LinkEdge]:
        """Visible links for a set of states."""
        return resolve_links(self.config, states)

    def compute_frame(self, elapsed_minutes: float) -> Frame:
        """
        Evaluate the full pipeline at one instant.

        Parameters
        ----------
        elapsed_minutes : float
            Time since the reference epoch (minutes).

        Returns
        -------
        Frame
            Positions, footprints and links.
        """
        states = self.propagate_all(elapsed_minutes)
        footprints = self.project_footprints(states)
        edges = self.evaluate_links(states)
        links = frozenset(edge for edge in edges if edge.visible)

        logger.debug(
            f"t={elapsed_minutes:.3f} min: {len(links)}/{len(edges)} links visible"
        )

        return Frame(
            elapsed_minutes=elapsed_minutes,
            satellites=tuple(states),
            footprints=tuple(footprints),
            edges=tuple(edges),
            links=links,
        )

    def frame_at(self, moment: datetime) -> Frame:
        """Evaluate the pipeline at a wall-clock instant (time of day, UTC)."""
        return self.compute_frame(elapsed_minutes_from_datetime(moment))

    def get_summary(self) -> Dict[str, Any]:
        """Get engine summary."""
        config = self.config
        return {
            "num_planes": config.num_planes,
            "sats_per_plane": config.sats_per_plane,
            "num_satellites": config.num_satellites,
            "orbital_radius_km": config.orbital_radius,
            "orbital_period_min": config.orbital_period,
            "inclination_deg": config.inclination_deg,
            "raan_spacing_deg": config.effective_raan_spacing_deg,
            "coverage_angular_radius": config.coverage_angular_radius,
            "max_link_distance_km": config.max_link_distance,
            "link_policy": config.link_policy.value,
            "comparisons_per_frame": self.comparisons_per_frame,
        }

    def __repr__(self) -> str:
        return (
            f"ConstellationEngine(\n"
            f"  satellites={self.num_satellites},\n"
            f"  planes={self.config.num_planes},\n"
            f"  policy={self.config.link_policy.value},\n"
            f"  pair_checks={self.comparisons_per_frame}\n"
            f")"
        )


def compute_frame(config: ConstellationConfig, elapsed_minutes: float) -> Frame:
    """Evaluate one instant without keeping an engine around."""
    return ConstellationEngine(config).compute_frame(elapsed_minutes)
