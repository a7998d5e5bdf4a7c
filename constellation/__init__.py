#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Constellation Geometry Package

Computes, for any instant, the positions, coverage footprints and
inter-satellite links of a circular-orbit constellation (Iridium by
default). Every evaluation is a pure function of configuration and time;
rendering and animation belong to the caller.

Example usage:

    from constellation import ConstellationEngine, create_iridium_config

    engine = ConstellationEngine(create_iridium_config())
    frame = engine.compute_frame(elapsed_minutes=30.0)
    print(frame.link_count)
"""

from .config import (
    ConstellationConfig,
    LinkPolicy,
    SatelliteIndex,
    EARTH_RADIUS_KM,
    create_iridium_config,
    create_iridium_crosslink_config,
    get_preset,
    list_presets,
    PRESET_REGISTRY,
    DEFAULT_PRESET,
)

from .orbit import (
    CircularOrbit,
    propagate,
    phase_offset,
)

from .footprint import (
    CoverageFootprint,
    project,
    tangent_frame,
)

from .links import (
    LinkEdge,
    candidate_pairs,
    evaluate_links,
    pairwise_distances,
    planes_adjacent,
    resolve_links,
)

from .engine import (
    ConstellationEngine,
    Frame,
    SatelliteState,
    compute_frame,
)

from .clock import (
    MINUTES_PER_DAY,
    elapsed_minutes_from_datetime,
    utc_now_minutes,
)


__all__ = [
    # Configuration
    "ConstellationConfig",
    "LinkPolicy",
    "SatelliteIndex",
    "EARTH_RADIUS_KM",
    "create_iridium_config",
    "create_iridium_crosslink_config",
    "get_preset",
    "list_presets",
    "PRESET_REGISTRY",
    "DEFAULT_PRESET",

    # Orbit
    "CircularOrbit",
    "propagate",
    "phase_offset",

    # Footprint
    "CoverageFootprint",
    "project",
    "tangent_frame",

    # Links
    "LinkEdge",
    "candidate_pairs",
    "evaluate_links",
    "pairwise_distances",
    "planes_adjacent",
    "resolve_links",

    # Engine
    "ConstellationEngine",
    "Frame",
    "SatelliteState",
    "compute_frame",

    # Clock
    "MINUTES_PER_DAY",
    "elapsed_minutes_from_datetime",
    "utc_now_minutes",
]

__version__ = "1.0.0"
