"""
Binary STL decoder

Layout (little-endian, no padding):
    80 bytes   header, NUL padded
    4 bytes    uint32 triangle count N
    N x 50     records: 3 float32 normal, 9 float32 vertices, uint16 attribute
"""

import logging
from typing import Protocol

import numpy as np

from .errors import StreamReadError, TruncatedError
from .model import Mesh, Triangle

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
PREAMBLE_SIZE = HEADER_SIZE + 4
RECORD_SIZE = 50
READ_CHUNK_SIZE = 1 << 20

RECORD_DTYPE = np.dtype([
    ('normal', '<f4', (3,)),
    ('vertices', '<f4', (3, 3)),
    ('attribute_byte_count', '<u2'),
])


class ByteSource(Protocol):
    """Something that can deliver exactly ``size`` more bytes"""

    def read_exact(self, size: int) -> bytes:
        """Return exactly ``size`` bytes or raise TruncatedError"""
        ...


class StreamSource:
    """
    Byte source over a binary file object

    Only the requested bytes are consumed, anything after the last triangle
    record stays in the stream.
    """

    def __init__(self, stream):
        self.stream = stream

    def read_exact(self, size):
        chunks = []
        remaining = size
        while remaining > 0:
            try:
                # Bounded reads, a bogus declared count must not allocate up front
                chunk = self.stream.read(min(remaining, READ_CHUNK_SIZE))
            except OSError as e:
                raise StreamReadError(f"Failed to read STL stream: {e}") from e
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        if len(data) < size:
            raise TruncatedError(size, len(data))
        return data


class BufferSource:
    """Byte source over an in-memory buffer"""

    def __init__(self, data):
        self.data = memoryview(data).cast('B')
        self.offset = 0

    @property
    def remaining(self):
        return len(self.data) - self.offset

    def read_exact(self, size):
        if size > self.remaining:
            raise TruncatedError(size, self.remaining)
        chunk = self.data[self.offset:self.offset + size].tobytes()
        self.offset += size
        return chunk


def _decode_header(raw):
    # Latin-1 maps every byte, vendor headers are not always ASCII
    return raw.decode('latin-1').strip('\x00')


def decode_binary(source: ByteSource) -> Mesh:
    """
    Decode a binary STL from any byte source

    Args:
        source: StreamSource, BufferSource or another ByteSource

    Returns:
        Mesh with the declared number of triangles

    Raises:
        TruncatedError: fewer than 84 header bytes or N x 50 record bytes
        StreamReadError: the underlying stream failed
    """
    preamble = source.read_exact(PREAMBLE_SIZE)
    header = _decode_header(preamble[:HEADER_SIZE])
    count = int(np.frombuffer(preamble, dtype='<u4', count=1, offset=HEADER_SIZE)[0])
    logger.debug("Binary STL header %r declares %d triangles", header, count)

    payload = source.read_exact(count * RECORD_SIZE)
    if count:
        records = np.frombuffer(payload, dtype=RECORD_DTYPE, count=count)
    else:
        records = np.zeros(0, dtype=RECORD_DTYPE)

    triangles = [
        Triangle(
            normal=record['normal'].tolist(),
            vertices=record['vertices'].tolist(),
            attribute_byte_count=int(record['attribute_byte_count']),
        )
        for record in records
    ]
    logger.debug("Decoded %d triangles from binary STL", len(triangles))
    return Mesh(header=header, triangles=triangles)


def decode_binary_stream(stream) -> Mesh:
    """Decode a binary STL from a readable binary stream"""
    return decode_binary(StreamSource(stream))


def decode_binary_bytes(data) -> Mesh:
    """Decode a binary STL held entirely in memory"""
    return decode_binary(BufferSource(data))
