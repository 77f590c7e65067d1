"""
Bounding-box calculation over every vertex of a mesh
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """Per-axis (x, y, z) extents as float32 arrays"""
    mins: np.ndarray
    maxs: np.ndarray

    @property
    def dimensions(self) -> np.ndarray:
        # An empty mesh has mins > maxs, the subtraction overflows to -inf
        with np.errstate(over='ignore'):
            return (self.maxs - self.mins).astype(np.float32)

    @property
    def is_empty(self) -> bool:
        return bool(np.any(self.mins > self.maxs))


def bounding_box(mesh) -> BoundingBox:
    """
    Compute per-axis minimum and maximum across all triangle vertices

    Args:
        mesh: Mesh to scan

    Returns:
        BoundingBox. For a mesh without triangles mins start at the largest
        finite float32 and maxs at its negation, so mins > maxs.
    """
    largest = np.finfo(np.float32).max
    mins = np.full(3, largest, dtype=np.float32)
    maxs = np.full(3, -largest, dtype=np.float32)

    vertices = mesh.vertex_array().reshape(-1, 3)
    if len(vertices):
        # fmin/fmax skip NaN coordinates instead of propagating them
        mins = np.fmin(mins, np.fmin.reduce(vertices, axis=0))
        maxs = np.fmax(maxs, np.fmax.reduce(vertices, axis=0))
    return BoundingBox(mins=mins, maxs=maxs)


def dimensions(mesh) -> np.ndarray:
    """Size of the mesh along x, y and z"""
    return bounding_box(mesh).dimensions
