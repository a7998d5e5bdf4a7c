#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Vector Utilities for the Constellation Geometry Engine

Small helpers shared by the propagator, footprint projector and link
resolver. Vectors are numpy arrays of shape (3,).

Two frames are in use:
- world frame: kilometers, centered on the primary body
- render frame: body radii, as consumed by a rendering layer

Only to_render_frame() and to_world_frame() convert between them.
"""

import math
import numpy as np
from typing import Sequence, Union

VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(value: VectorLike) -> np.ndarray:
    """Return value as a float array of shape (3,)."""
    vector = np.asarray(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vector.shape}")
    return vector


def norm(vector: VectorLike) -> float:
    """Euclidean length of a vector."""
    return float(np.linalg.norm(as_vector(vector)))


def normalize(vector: VectorLike) -> np.ndarray:
    """
    Scale a vector to unit length.

    Parameters
    ----------
    vector : array-like
        Non-zero 3-vector

    Returns
    -------
    np.ndarray
        Unit vector with the same direction
    """
    v = as_vector(vector)
    length = np.linalg.norm(v)
    assert length > 0.0, "Cannot normalize a zero-length vector"
    return v / length


def distance(a: VectorLike, b: VectorLike) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(as_vector(a) - as_vector(b)))


def angle_between(a: VectorLike, b: VectorLike) -> float:
    """
    Angle between two non-zero vectors as seen from the origin.

    Returns
    -------
    float
        Angle in radians (0 to π)
    """
    cos_angle = float(np.dot(normalize(a), normalize(b)))
    return math.acos(max(-1.0, min(1.0, cos_angle)))


def rotation_about_x(angle: float) -> np.ndarray:
    """Rotation matrix about the x axis (radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_about_z(angle: float) -> np.ndarray:
    """Rotation matrix about the z (polar) axis (radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def to_render_frame(position_km: VectorLike, body_radius: float) -> np.ndarray:
    """Convert a world-frame position (km) to body radii."""
    return as_vector(position_km) / body_radius


def to_world_frame(position_radii: VectorLike, body_radius: float) -> np.ndarray:
    """Convert a render-frame position (body radii) to km."""
    return as_vector(position_radii) * body_radius
