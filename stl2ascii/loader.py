"""
Format detection and file loading for STL data
"""

import io
import logging
from pathlib import Path

import numpy as np

from .ascii_stl import decode_ascii_stream
from .binary_stl import PREAMBLE_SIZE, RECORD_SIZE, HEADER_SIZE, decode_binary_bytes

logger = logging.getLogger(__name__)

FORMATS = ('auto', 'binary', 'ascii')


def detect_format(data):
    """
    Guess whether raw STL bytes are binary or ASCII

    Binary files often start with "solid" too, so an exact size match against
    the declared triangle count wins over the keyword.
    """
    if len(data) >= PREAMBLE_SIZE:
        count = int(np.frombuffer(data, dtype='<u4', count=1, offset=HEADER_SIZE)[0])
        if PREAMBLE_SIZE + count * RECORD_SIZE == len(data):
            return 'binary'
    if bytes(data[:5]) == b"solid":
        return 'ascii'
    return 'binary'


def load_bytes(data, stl_format='auto'):
    """
    Decode STL bytes into a Mesh

    Args:
        data: Complete file contents
        stl_format: 'auto', 'binary' or 'ascii'
    """
    if stl_format not in FORMATS:
        raise ValueError(f"Unknown STL format '{stl_format}', expected one of: {', '.join(FORMATS)}")
    if stl_format == 'auto':
        stl_format = detect_format(data)
        logger.debug("Detected %s STL", stl_format)

    if stl_format == 'binary':
        return decode_binary_bytes(data)
    return decode_ascii_stream(io.BytesIO(data))


def load_file(path, stl_format='auto'):
    """Read and decode an STL file from disk"""
    path = Path(path)
    logger.info("Loading %s", path)
    return load_bytes(path.read_bytes(), stl_format)
