"""
ASCII STL decoder

Grammar, one statement per line, surrounding whitespace ignored:

    solid <name>
      facet normal <nx> <ny> <nz>
        outer loop
          vertex <x> <y> <z>        (three times)
        endloop
      endfacet                      (any number of facets)
    endsolid <name>

Decoding stops at the first line that is not a ``facet normal`` statement,
which covers ``endsolid`` and end of file alike. Once a facet has started,
every remaining statement of that facet is mandatory.
"""

import io
import logging
import re

import numpy as np

from .errors import (
    ASCIIDecodeError,
    MalformedLineError,
    NumericParseError,
    StreamReadError,
    UnexpectedFieldCountError,
)
from .model import Mesh, Triangle

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = "Imported from ASCII STL by stl2ascii - {name}"

_STRIP_CHARS = " \t\r\n"

# ASCII decimal or exponent form, or inf/infinity/nan, with an optional sign
_FLOAT_TOKEN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class LineReader:
    """Reads lines from a text or binary stream and counts them"""

    def __init__(self, stream):
        self.stream = stream
        self.line_number = 0

    def readline(self):
        """Next line as str, empty string at end of stream"""
        try:
            line = self.stream.readline()
        except OSError as e:
            raise StreamReadError(f"Failed to read STL stream: {e}") from e
        if isinstance(line, bytes):
            try:
                line = line.decode('utf-8')
            except UnicodeDecodeError as e:
                raise StreamReadError(
                    f"Line {self.line_number + 1} is not valid UTF-8: {e}"
                ) from e
        if line:
            self.line_number += 1
        return line


def read_statement(reader, prefix, delimiter, expected_fields):
    """
    Read one line and check it against a statement shape

    Args:
        reader: LineReader positioned at the statement
        prefix: Literal the trimmed line must start with
        delimiter: Separator for the remainder; empty splits into characters
        expected_fields: Number of fields the remainder must split into

    Returns:
        List of the fields after the prefix
    """
    raw = reader.readline()
    number = reader.line_number
    if not raw:
        raise MalformedLineError(f"Unexpected end of file, expected '{prefix}'", line_number=number + 1)

    line = raw.strip(_STRIP_CHARS)
    if len(line) < len(prefix):
        raise MalformedLineError(f"Line shorter than '{prefix}'", line=line, line_number=number)
    if not line.startswith(prefix):
        raise MalformedLineError(f"Line does not start with '{prefix}'", line=line, line_number=number)

    remainder = line[len(prefix):]
    if delimiter:
        fields = remainder.split(delimiter)
    else:
        fields = list(remainder)
    if len(fields) != expected_fields:
        raise UnexpectedFieldCountError(
            f"Expected {expected_fields} fields after '{prefix}', got {len(fields)}",
            line=line,
            line_number=number,
        )
    return fields


def parse_float32(token, reader=None):
    """Parse a token as an IEEE single precision float"""
    number = reader.line_number if reader is not None else None
    if not _FLOAT_TOKEN.fullmatch(token):
        raise NumericParseError(f"Invalid number {token!r}", line_number=number)
    # Goes through float64, a value halfway between two float32 neighbours
    # after that first rounding can land one ulp off a direct parse
    value = float(token)
    with np.errstate(over='ignore'):
        single = np.float32(value)
    if np.isinf(single) and not np.isinf(value):
        raise NumericParseError(f"Number {token!r} out of float32 range", line_number=number)
    return float(single)


def _read_vector(reader, prefix):
    fields = read_statement(reader, prefix, " ", 3)
    return tuple(parse_float32(field, reader) for field in fields)


def _read_triangle(reader):
    """Read the statements that follow a matched ``facet normal`` line"""
    read_statement(reader, "outer loop", "", 0)
    vertices = [_read_vector(reader, "vertex ") for _ in range(3)]
    read_statement(reader, "endloop", "", 0)
    read_statement(reader, "endfacet", "", 0)
    return vertices


def decode_ascii_stream(stream) -> Mesh:
    """
    Decode an ASCII STL from a line-oriented stream

    Args:
        stream: Text stream, or binary stream holding UTF-8 text

    Returns:
        Mesh whose header embeds the solid name

    Raises:
        MalformedLineError: first line missing or not a ``solid`` statement,
            or a facet statement out of place
        UnexpectedFieldCountError: wrong number of fields inside a facet
        NumericParseError: a coordinate is not a float
        StreamReadError: the underlying stream failed

    Facet errors carry the triangles decoded so far on ``partial_mesh``.
    """
    reader = LineReader(stream)

    first = reader.readline()
    if not first:
        raise MalformedLineError("Empty ASCII STL, expected 'solid'", line_number=1)
    first = first.strip(_STRIP_CHARS)
    fields = first.split(None, 1)
    if not fields or fields[0] != "solid":
        raise MalformedLineError("First line is not a 'solid' statement", line=first, line_number=1)
    name = fields[1].strip(_STRIP_CHARS) if len(fields) > 1 else ""

    mesh = Mesh(header=HEADER_TEMPLATE.format(name=name))
    while True:
        try:
            normal_fields = read_statement(reader, "facet normal ", " ", 3)
        except ASCIIDecodeError as e:
            logger.debug("Stopped reading facets: %s", e)
            break

        try:
            normal = tuple(parse_float32(field, reader) for field in normal_fields)
            vertices = _read_triangle(reader)
        except ASCIIDecodeError as e:
            e.partial_mesh = Mesh(header=mesh.header, triangles=list(mesh.triangles))
            raise
        mesh.triangles.append(Triangle(normal=normal, vertices=vertices))

    logger.debug("Decoded %d triangles from ASCII STL solid %r", mesh.triangle_count, name)
    return mesh


def decode_ascii_text(text) -> Mesh:
    """Decode an ASCII STL held in a string"""
    return decode_ascii_stream(io.StringIO(text))
