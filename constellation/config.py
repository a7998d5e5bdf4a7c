#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Constellation Configuration

Immutable description of a circular, evenly phased constellation together
with the inter-satellite link policy. All derived quantities (radians,
orbital radius, mean motion) are computed once at construction.

Distances in kilometers, time in minutes, input angles in degrees.
"""

import math
import numbers
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional

# Standard Earth parameters
EARTH_RADIUS_KM = 6371.0  # Mean radius in km

# Iridium constellation parameters
IRIDIUM_ALTITUDE_KM = 780.0
IRIDIUM_PERIOD_MIN = 100.4
IRIDIUM_NUM_PLANES = 6
IRIDIUM_SATS_PER_PLANE = 11
IRIDIUM_INCLINATION_DEG = 86.4
IRIDIUM_COVERAGE_RADIUS_KM = 2700.0
IRIDIUM_MAX_LINK_DISTANCE_KM = 4000.0


def _is_count(value) -> bool:
    """True for integers (numpy integers included), False for bools and floats."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class LinkPolicy(Enum):
    """Rules deciding which satellite pairs may hold a crosslink."""

    DISTANCE_ONLY = "distance"
    PLANE_ADJACENT = "plane_adjacent"
    DISABLED = "disabled"


@dataclass(frozen=True)
class SatelliteIndex:
    """
    Position of a satellite within the constellation.

    Attributes
    ----------
    plane : int
        Orbital plane index (0 to num_planes - 1)
    sat : int
        Satellite index within its plane (0 to sats_per_plane - 1)
    flat : int
        plane * sats_per_plane + sat
    """
    plane: int
    sat: int
    flat: int

    def __repr__(self) -> str:
        return f"SatelliteIndex(P{self.plane}S{self.sat}, flat={self.flat})"


@dataclass(frozen=True)
class ConstellationConfig:
    """
    Configuration for a constellation.

    Attributes
    ----------
    body_radius : float
        Radius of the primary body (km).
    altitude : float
        Satellite altitude above the surface (km).
    orbital_period : float
        Orbital period (minutes).
    num_planes : int
        Number of orbital planes.
    sats_per_plane : int
        Satellites per plane.
    inclination_deg : float
        Orbital inclination (degrees).
    raan_spacing_deg : float, optional
        RAAN step between consecutive planes (degrees). None = 360 / num_planes.
    coverage_radius : float
        Ground radius served by one satellite (km).
    max_link_distance : float
        Maximum crosslink distance (km).
    link_policy : LinkPolicy
        Rule used by the link resolver.
    """

    body_radius: float = EARTH_RADIUS_KM
    altitude: float = IRIDIUM_ALTITUDE_KM
    orbital_period: float = IRIDIUM_PERIOD_MIN
    num_planes: int = IRIDIUM_NUM_PLANES
    sats_per_plane: int = IRIDIUM_SATS_PER_PLANE
    inclination_deg: float = IRIDIUM_INCLINATION_DEG
    raan_spacing_deg: Optional[float] = None
    coverage_radius: float = IRIDIUM_COVERAGE_RADIUS_KM
    max_link_distance: float = IRIDIUM_MAX_LINK_DISTANCE_KM
    link_policy: LinkPolicy = LinkPolicy.DISTANCE_ONLY

    # Derived parameters
    orbital_radius: float = field(init=False, repr=False, compare=False)
    inclination: float = field(init=False, repr=False, compare=False)
    raan_spacing: float = field(init=False, repr=False, compare=False)
    mean_motion: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Validate inputs
        if not self.body_radius > 0 or not math.isfinite(self.body_radius):
            raise ValueError("Body radius must be positive and finite")
        if not self.altitude > 0 or not math.isfinite(self.altitude):
            raise ValueError("Altitude must be positive and finite")
        if not self.orbital_period > 0:
            raise ValueError("Orbital period must be positive")
        if not math.isfinite(self.orbital_period):
            raise ValueError("Orbital period must be finite")
        if not _is_count(self.num_planes) or self.num_planes < 1:
            raise ValueError("Number of planes must be a positive integer")
        if not _is_count(self.sats_per_plane) or self.sats_per_plane < 1:
            raise ValueError("Satellites per plane must be a positive integer")
        if not math.isfinite(self.inclination_deg):
            raise ValueError("Inclination must be finite")
        if self.raan_spacing_deg is not None and not math.isfinite(self.raan_spacing_deg):
            raise ValueError("RAAN spacing must be finite")
        if not self.coverage_radius >= 0:
            raise ValueError("Coverage radius cannot be negative")
        if not self.max_link_distance >= 0:
            raise ValueError("Maximum link distance cannot be negative")
        if not isinstance(self.link_policy, LinkPolicy):
            raise ValueError(f"Unknown link policy: {self.link_policy!r}")

        self._calculate_derived_parameters()

    def _calculate_derived_parameters(self) -> None:
        """Calculate derived parameters; angles are converted here only."""
        if self.raan_spacing_deg is None:
            raan_spacing_deg = 360.0 / self.num_planes
        else:
            raan_spacing_deg = self.raan_spacing_deg

        object.__setattr__(self, "orbital_radius", self.body_radius + self.altitude)
        object.__setattr__(self, "inclination", math.radians(self.inclination_deg))
        object.__setattr__(self, "raan_spacing", math.radians(raan_spacing_deg))
        object.__setattr__(self, "mean_motion", 2 * math.pi / self.orbital_period)

    @property
    def num_satellites(self) -> int:
        """Total number of satellites."""
        return self.num_planes * self.sats_per_plane

    @property
    def effective_raan_spacing_deg(self) -> float:
        """RAAN step between planes actually in use (degrees)."""
        return math.degrees(self.raan_spacing)

    @property
    def coverage_angular_radius(self) -> float:
        """Coverage disc radius in body radii (dimensionless)."""
        return self.coverage_radius / self.body_radius

    @property
    def candidate_pair_count(self) -> int:
        """Pairs the link resolver checks per evaluation: N(N-1)/2."""
        n = self.num_satellites
        return n * (n - 1) // 2

    def satellite_index(self, plane: int, sat: int) -> SatelliteIndex:
        """
        Build the index of satellite `sat` in plane `plane`.

        Raises
        ------
        ValueError
            If either index is out of range.
        """
        if not 0 <= plane < self.num_planes:
            raise ValueError(f"Plane index {plane} out of range [0, {self.num_planes})")
        if not 0 <= sat < self.sats_per_plane:
            raise ValueError(
                f"Satellite index {sat} out of range [0, {self.sats_per_plane})"
            )
        return SatelliteIndex(plane=plane, sat=sat, flat=plane * self.sats_per_plane + sat)

    def satellite_index_from_flat(self, flat: int) -> SatelliteIndex:
        """Recover plane membership from a flat index."""
        if not 0 <= flat < self.num_satellites:
            raise ValueError(f"Flat index {flat} out of range [0, {self.num_satellites})")
        plane, sat = divmod(flat, self.sats_per_plane)
        return SatelliteIndex(plane=plane, sat=sat, flat=flat)

    def all_indices(self) -> List[SatelliteIndex]:
        """All satellite indices in flat order."""
        return [self.satellite_index_from_flat(i) for i in range(self.num_satellites)]

    def with_overrides(self, **overrides) -> "ConstellationConfig":
        """Return a copy with some fields replaced (re-validated)."""
        return replace(self, **overrides)

    def __repr__(self) -> str:
        return (
            f"ConstellationConfig(\n"
            f"  planes={self.num_planes} x {self.sats_per_plane} sats,\n"
            f"  altitude={self.altitude:.1f} km,\n"
            f"  period={self.orbital_period:.2f} min,\n"
            f"  inclination={self.inclination_deg:.2f}°,\n"
            f"  RAAN spacing={self.effective_raan_spacing_deg:.2f}°,\n"
            f"  coverage={self.coverage_radius:.0f} km,\n"
            f"  max link={self.max_link_distance:.0f} km,\n"
            f"  policy={self.link_policy.value}\n"
            f")"
        )


def create_iridium_config(**overrides) -> ConstellationConfig:
    """
    Iridium constellation with distance-only crosslinks.

    Planes are spread evenly over 360 degrees of RAAN and the period is
    100.4 minutes.

    Parameters
    ----------
    **overrides
        Any ConstellationConfig field to replace

    Returns
    -------
    ConstellationConfig
    """
    return replace(ConstellationConfig(), **overrides)


def create_iridium_crosslink_config(**overrides) -> ConstellationConfig:
    """
    Iridium constellation restricted to intra-plane and adjacent-plane links.

    Uses a fixed 30 degree RAAN spacing and a 100.5 minute period.
    """
    config = ConstellationConfig(
        orbital_period=100.5,
        raan_spacing_deg=30.0,
        link_policy=LinkPolicy.PLANE_ADJACENT,
    )
    return replace(config, **overrides)


# Registry mapping preset names to factories
PRESET_REGISTRY: Dict[str, Callable[..., ConstellationConfig]] = {
    "iridium": create_iridium_config,
    "iridium_crosslink": create_iridium_crosslink_config,
}

DEFAULT_PRESET = "iridium"


def get_preset(name: str, **overrides) -> ConstellationConfig:
    """
    Build a configuration from a named preset.

    Raises
    ------
    ValueError
        If the preset name is not registered.
    """
    if name not in PRESET_REGISTRY:
        available = ", ".join(PRESET_REGISTRY.keys())
        raise ValueError(f"Unknown preset: '{name}'. Available presets: {available}")
    return PRESET_REGISTRY[name](**overrides)


def list_presets() -> Dict[str, str]:
    """Preset names with the first line of their description."""
    return {
        name: (factory.__doc__ or "").strip().splitlines()[0]
        for name, factory in PRESET_REGISTRY.items()
    }
