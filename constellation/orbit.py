#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Circular Orbit Propagation

Positions satellites on circular orbits advancing at a constant angular
rate. No perturbations are modeled.
All distances in kilometers, angles in radians, time in minutes.
"""

import math
import numpy as np
from typing import Tuple

from .config import ConstellationConfig
from .vector import rotation_about_x, rotation_about_z

TWO_PI = 2 * math.pi


class CircularOrbit:
    """
    A circular orbital plane.

    Parameters
    ----------
    radius : float
        Distance from the body center (km)
    inclination : float
        Orbital plane tilt about the line of nodes (radians)
    raan : float
        Right ascension of the ascending node (radians)
    period : float
        Time for one complete orbit (minutes)

    Attributes
    ----------
    mean_motion : float
        Angular rate (radians/minute)
    """

    def __init__(
        self,
        radius: float,
        inclination: float,
        raan: float,
        period: float
    ):
        # Validate inputs
        if radius <= 0:
            raise ValueError("Orbital radius must be positive")
        if period <= 0:
            raise ValueError("Orbital period must be positive")

        self.radius = radius
        self.inclination = inclination
        self.raan = raan
        self.period = period
        self.mean_motion = TWO_PI / period

        # Inclination about the x axis first, then RAAN about the pole
        self._rotation = rotation_about_z(raan) @ rotation_about_x(inclination)

    @classmethod
    def for_plane(cls, config: ConstellationConfig, plane_index: int) -> "CircularOrbit":
        """
        Build the orbit of one plane of a constellation.

        The plane's RAAN is raan_spacing * plane_index.
        """
        if not 0 <= plane_index < config.num_planes:
            raise ValueError(
                f"Plane index {plane_index} out of range [0, {config.num_planes})"
            )
        return cls(
            radius=config.orbital_radius,
            inclination=config.inclination,
            raan=config.raan_spacing * plane_index,
            period=config.orbital_period,
        )

    def mean_anomaly_at_time(self, t: float, phase: float = 0.0) -> float:
        """
        Calculate mean anomaly at time t.

        Parameters
        ----------
        t : float
            Elapsed time (minutes)
        phase : float
            Mean anomaly at t = 0 (radians)

        Returns
        -------
        float
            Mean anomaly at time t (radians, 0 to 2π)
        """
        return (self.mean_motion * t + phase) % TWO_PI

    def position_in_orbital_plane(self, anomaly: float) -> Tuple[float, float]:
        """Unit-circle (x, y) position in the orbital plane."""
        return math.cos(anomaly), math.sin(anomaly)

    def orbital_to_world_matrix(self) -> np.ndarray:
        """
        Get rotation matrix from the orbital plane to the world frame.

        Returns
        -------
        np.ndarray
            3x3 rotation matrix
        """
        return self._rotation.copy()

    def position_at_anomaly(self, anomaly: float) -> np.ndarray:
        """
        Calculate world-frame position at a given anomaly.

        Returns
        -------
        np.ndarray
            Position vector [x, y, z] (km)
        """
        x, y = self.position_in_orbital_plane(anomaly)
        return self.radius * (self._rotation @ np.array([x, y, 0.0]))

    def position_at_time(self, t: float, phase: float = 0.0) -> np.ndarray:
        """World-frame position (km) at elapsed time t (minutes)."""
        return self.position_at_anomaly(self.mean_anomaly_at_time(t, phase))

    def __repr__(self) -> str:
        return (
            f"CircularOrbit(\n"
            f"  radius={self.radius:.2f} km,\n"
            f"  inclination={math.degrees(self.inclination):.2f}°,\n"
            f"  RAAN={math.degrees(self.raan):.2f}°,\n"
            f"  period={self.period:.2f} min\n"
            f")"
        )


def phase_offset(config: ConstellationConfig, sat_index: int) -> float:
    """Even in-plane spacing: 2π * sat_index / sats_per_plane (radians)."""
    return TWO_PI * sat_index / config.sats_per_plane


def propagate(
    config: ConstellationConfig,
    plane_index: int,
    sat_index: int,
    elapsed_minutes: float
) -> np.ndarray:
    """
    Position of one satellite at the given time.

    Parameters
    ----------
    config : ConstellationConfig
        Constellation parameters
    plane_index : int
        Orbital plane (0 to num_planes - 1)
    sat_index : int
        Satellite within the plane (0 to sats_per_plane - 1)
    elapsed_minutes : float
        Time since the reference epoch (minutes)

    Returns
    -------
    np.ndarray
        Position [x, y, z] in the world frame (km)
    """
    if not 0 <= sat_index < config.sats_per_plane:
        raise ValueError(
            f"Satellite index {sat_index} out of range [0, {config.sats_per_plane})"
        )
    orbit = CircularOrbit.for_plane(config, plane_index)
    return orbit.position_at_time(elapsed_minutes, phase_offset(config, sat_index))
