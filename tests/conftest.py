"""
Shared fixtures for the stl2ascii test suite.

Binary STL fixtures are packed with struct so they do not depend on the
decoder under test.
"""

import struct

import pytest

from stl2ascii.model import Mesh, Triangle


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def pack_binary_stl(triangles, header=b"stl2ascii test fixture", count=None):
    """Pack (normal, vertices, attribute) tuples into binary STL bytes."""
    declared = len(triangles) if count is None else count
    chunks = [header.ljust(80, b"\0")[:80], struct.pack("<I", declared)]
    for normal, vertices, attribute in triangles:
        flat = list(normal) + [c for vertex in vertices for c in vertex]
        chunks.append(struct.pack("<12fH", *flat, attribute))
    return b"".join(chunks)


def ascii_facet(normal, vertices, indent="  "):
    lines = [f"{indent}facet normal {normal[0]} {normal[1]} {normal[2]}",
             f"{indent}  outer loop"]
    for x, y, z in vertices:
        lines.append(f"{indent}    vertex {x} {y} {z}")
    lines += [f"{indent}  endloop", f"{indent}endfacet"]
    return "\n".join(lines) + "\n"


def ascii_stl(facets, name="t"):
    """Build an ASCII STL document from (normal, vertices) pairs."""
    body = "".join(ascii_facet(normal, vertices) for normal, vertices in facets)
    return f"solid {name}\n{body}endsolid {name}\n"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_TRIANGLES = [
    ((0.0, 0.0, 1.0), ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)), 0),
    ((0.0, -1.0, 0.0), ((0.0, 0.0, 0.0), (2.0, 0.0, 3.5), (1.0, 0.0, -1.5)), 7),
]


@pytest.fixture
def binary_builder():
    return pack_binary_stl


@pytest.fixture
def ascii_builder():
    return ascii_stl


@pytest.fixture
def sample_binary():
    return pack_binary_stl(SAMPLE_TRIANGLES, header=b"sample part")


@pytest.fixture
def sample_ascii():
    return ascii_stl([(normal, vertices) for normal, vertices, _ in SAMPLE_TRIANGLES], name="sample")


@pytest.fixture
def sample_mesh():
    return Mesh(
        header="sample part",
        triangles=[Triangle(n, v, a) for n, v, a in SAMPLE_TRIANGLES],
    )


@pytest.fixture
def empty_mesh():
    return Mesh(header="empty")
