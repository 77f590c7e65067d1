"""
STL to ASCII art
Decodes binary and ASCII STL meshes, projects them orthographically onto a
coarse grid and renders the grid with block-shading characters
"""

from .ascii_stl import decode_ascii_stream, decode_ascii_text
from .binary_stl import (
    BufferSource,
    ByteSource,
    StreamSource,
    decode_binary,
    decode_binary_bytes,
    decode_binary_stream,
)
from .errors import (
    ASCIIDecodeError,
    MalformedLineError,
    NumericParseError,
    STLError,
    StreamReadError,
    TruncatedError,
    UnexpectedFieldCountError,
)
from .geometry import BoundingBox, bounding_box, dimensions
from .loader import detect_format, load_bytes, load_file
from .model import Mesh, Triangle
from .projection import ProjectFrom, grid_shape, project
from .render import render_image, render_text

__version__ = "0.1.0"
