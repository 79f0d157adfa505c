# core/stl_binary.py

import logging
import struct

import numpy as np

from .common_types import Mesh
from .exceptions import MalformedInputError, TruncatedInputError

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_OFFSET = HEADER_SIZE + COUNT_SIZE # First triangle record starts at byte 84

# One 50 byte triangle record, little-endian throughout
_stl_dtype_record = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attributes", "<u2"),
])
RECORD_SIZE = _stl_dtype_record.itemsize

def read_triangle_count(buffer: bytes) -> int:
    """
    Reads the declared triangle count from a binary STL header.

    Raises:
        TruncatedInputError: If the buffer does not even hold header + count.
    """
    if len(buffer) < RECORD_OFFSET:
        raise TruncatedInputError(
            f"Binary STL needs at least {RECORD_OFFSET} bytes for header and triangle count, got {len(buffer)}."
        )
    return struct.unpack_from("<I", buffer, HEADER_SIZE)[0]

def decode_binary_stl(buffer: bytes) -> Mesh:
    """
    Decodes a binary STL payload into a Mesh.

    Layout: 80 byte header (ignored), uint32 triangle count N, then N records
    of 12 byte normal + 36 bytes of vertices + 2 byte attribute (ignored).
    Records are read in file order starting at byte 84. Bytes after the last
    declared record are ignored.

    Args:
        buffer: The complete file contents.

    Returns:
        A Mesh with exactly N facets.

    Raises:
        TruncatedInputError: If the buffer is shorter than 84 + 50 * N bytes.
        MalformedInputError: If a record holds a NaN or infinite float.
    """
    triangle_count = read_triangle_count(buffer)
    required = RECORD_OFFSET + RECORD_SIZE * triangle_count
    if len(buffer) < required:
        raise TruncatedInputError(
            f"Binary STL declares {triangle_count} triangles ({required} bytes) "
            f"but the buffer holds only {len(buffer)} bytes."
        )
    if len(buffer) > required:
        logger.debug(f"Ignoring {len(buffer) - required} trailing bytes after the last triangle record.")
    if triangle_count == 0:
        return Mesh.empty()

    records = np.frombuffer(buffer, dtype=_stl_dtype_record, count=triangle_count, offset=RECORD_OFFSET)
    finite = (
        np.isfinite(records["normal"]).all(axis=1)
        & np.isfinite(records["vertices"]).reshape(triangle_count, -1).all(axis=1)
    )
    if not finite.all():
        bad = int(np.argmin(finite))
        raise MalformedInputError(
            f"Binary STL record {bad} holds a NaN or infinite coordinate "
            f"({int((~finite).sum())} of {triangle_count} records affected)."
        )
    mesh = Mesh(
        normals=records["normal"].astype(np.float64),
        triangles=records["vertices"].astype(np.float64),
    )
    logger.debug(f"Decoded {mesh.facet_count} facets from binary STL.")
    return mesh
