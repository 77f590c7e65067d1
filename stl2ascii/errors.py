"""
Exceptions raised while decoding STL data
"""


class STLError(Exception):
    """Base class for every decode failure"""


class TruncatedError(STLError):
    """Binary STL data ended before the header or a triangle record was complete"""

    def __init__(self, needed, available):
        self.needed = needed
        self.available = available
        super().__init__(f"Truncated STL data: needed {needed} bytes, only {available} available")


class StreamReadError(STLError):
    """The underlying stream raised while being read"""


class ASCIIDecodeError(STLError):
    """
    A facet in an ASCII STL could not be decoded

    Triangles accepted before the failing facet are kept on ``partial_mesh``.
    Callers decide whether a partial import is acceptable.
    """

    def __init__(self, message, line=None, line_number=None, partial_mesh=None):
        self.line = line
        self.line_number = line_number
        self.partial_mesh = partial_mesh
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedLineError(ASCIIDecodeError):
    """Line is shorter than, or does not start with, the expected keyword"""


class UnexpectedFieldCountError(ASCIIDecodeError):
    """Line carries the wrong number of delimited fields"""


class NumericParseError(ASCIIDecodeError):
    """A field that should hold a float could not be parsed"""
