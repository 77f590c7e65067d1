"""
Mesh Data Model
Decoded triangles plus header metadata; every other module operates on it
"""

from dataclasses import dataclass, field

import numpy as np
import trimesh

from .geometry import bounding_box


def _vector3(values, what):
    """Coerce three components to floats rounded to single precision"""
    components = tuple(float(np.float32(v)) for v in values)
    if len(components) != 3:
        raise ValueError(f"{what} must have 3 components, got {len(components)}")
    return components


def _format_vector(values):
    return "[" + " ".join(f"{float(v):g}" for v in values) + "]"


@dataclass(frozen=True)
class Triangle:
    """
    One facet of the mesh

    Args:
        normal: Facet normal (not checked against the vertex winding)
        vertices: Exactly three (x, y, z) vertices
        attribute_byte_count: Trailing uint16 of the binary record, usually 0
    """
    normal: tuple
    vertices: tuple
    attribute_byte_count: int = 0

    def __post_init__(self):
        vertices = tuple(self.vertices)
        if len(vertices) != 3:
            raise ValueError(f"Triangle needs exactly 3 vertices, got {len(vertices)}")
        object.__setattr__(self, 'normal', _vector3(self.normal, "normal"))
        object.__setattr__(self, 'vertices', tuple(_vector3(v, "vertex") for v in vertices))
        object.__setattr__(self, 'attribute_byte_count', int(self.attribute_byte_count))


@dataclass
class Mesh:
    """Decoded STL model"""
    header: str = ""
    triangles: list = field(default_factory=list)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def vertex_array(self) -> np.ndarray:
        """Vertices as a float32 array of shape (n, 3, 3)"""
        if not self.triangles:
            return np.zeros((0, 3, 3), dtype=np.float32)
        return np.array([t.vertices for t in self.triangles], dtype=np.float32)

    def normal_array(self) -> np.ndarray:
        """Normals as a float32 array of shape (n, 3)"""
        if not self.triangles:
            return np.zeros((0, 3), dtype=np.float32)
        return np.array([t.normal for t in self.triangles], dtype=np.float32)

    def summary(self) -> str:
        """
        Multi-line report with header, triangle count, dimensions and extents
        """
        box = bounding_box(self)
        lines = [
            f"Header: {self.header}",
            f"Triangles: {self.triangle_count}",
            f"Dimensions: {_format_vector(box.dimensions)}",
            f"Mins: {_format_vector(box.mins)}",
            f"Maxs: {_format_vector(box.maxs)}",
        ]
        return "\n".join(lines) + "\n"

    def __str__(self):
        return self.summary()

    def to_trimesh(self):
        """
        Build a trimesh.Trimesh from the decoded triangles

        Vertices are not merged, so face i uses vertices 3i, 3i+1 and 3i+2.
        """
        vertices = self.vertex_array().reshape(-1, 3).astype(np.float64)
        faces = np.arange(len(vertices), dtype=np.int64).reshape(-1, 3)
        mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
        mesh.metadata['header'] = self.header
        return mesh
