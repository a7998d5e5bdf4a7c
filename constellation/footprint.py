#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Coverage Footprint Projection

Maps a satellite position to the point on the body directly beneath it and
to an orientation for a flat coverage disc lying tangent to the surface at
that point. Disc size comes from ConstellationConfig.coverage_angular_radius.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import SatelliteIndex
from .vector import VectorLike, as_vector, normalize

DEFAULT_WORLD_UP = (0.0, 1.0, 0.0)


@dataclass(frozen=True, eq=False)
class CoverageFootprint:
    """
    Coverage footprint of one satellite.

    Attributes
    ----------
    index : SatelliteIndex, optional
        Satellite the footprint belongs to
    sub_satellite_point : np.ndarray
        Unit direction from the body center through the satellite
    orientation : np.ndarray
        3x3 rotation matrix with columns (right, up, normal); the disc's
        local z axis maps onto the sub-satellite point
    """
    index: Optional[SatelliteIndex]
    sub_satellite_point: np.ndarray
    orientation: np.ndarray

    @property
    def normal(self) -> np.ndarray:
        """Disc normal in the world frame."""
        return self.orientation[:, 2]

    @property
    def latitude(self) -> float:
        """Latitude of the sub-satellite point (radians, positive toward +z)."""
        z = max(-1.0, min(1.0, float(self.sub_satellite_point[2])))
        return math.asin(z)

    @property
    def longitude(self) -> float:
        """Longitude of the sub-satellite point (radians, -π to π)."""
        return math.atan2(self.sub_satellite_point[1], self.sub_satellite_point[0])

    @property
    def latitude_deg(self) -> float:
        """Latitude in degrees."""
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        """Longitude in degrees."""
        return math.degrees(self.longitude)

    def __repr__(self) -> str:
        return (f"CoverageFootprint({self.index}, lat={self.latitude_deg:.2f}°, "
                f"lon={self.longitude_deg:.2f}°)")


def tangent_frame(normal: VectorLike, world_up: VectorLike = DEFAULT_WORLD_UP) -> np.ndarray:
    """
    Build a right-handed orthonormal frame whose z axis is `normal`.

    Parameters
    ----------
    normal : array-like
        Unit target normal
    world_up : array-like
        Reference direction fixing the roll about the normal

    Returns
    -------
    np.ndarray
        3x3 rotation matrix with columns (right, up, normal)
    """
    n = normalize(normal)
    reference = as_vector(world_up)

    right = np.cross(reference, n)
    if np.linalg.norm(right) < 1e-9:
        # Normal is parallel to world_up; use the axis least aligned with it
        reference = np.zeros(3)
        reference[int(np.argmin(np.abs(n)))] = 1.0
        right = np.cross(reference, n)
    right = right / np.linalg.norm(right)

    up = np.cross(n, right)
    up = up / np.linalg.norm(up)

    return np.column_stack((right, up, n))


def project(
    position: VectorLike,
    index: Optional[SatelliteIndex] = None,
    world_up: VectorLike = DEFAULT_WORLD_UP
) -> CoverageFootprint:
    """
    Project a satellite position onto the body surface.

    Parameters
    ----------
    position : array-like
        Satellite position (any frame; must be non-zero)
    index : SatelliteIndex, optional
        Satellite the position belongs to
    world_up : array-like
        Reference direction used to fix the disc's roll

    Returns
    -------
    CoverageFootprint
        Sub-satellite point and disc orientation
    """
    sub_satellite_point = normalize(position)
    orientation = tangent_frame(sub_satellite_point, world_up)
    # The frame's normal column is the sub-satellite point itself
    orientation[:, 2] = sub_satellite_point
    return CoverageFootprint(
        index=index,
        sub_satellite_point=sub_satellite_point,
        orientation=orientation,
    )
