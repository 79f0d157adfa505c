# core/stl_reader.py

import logging
from typing import Optional, Tuple

from .common_types import Mesh, ParseMode, StlEncoding
from .exceptions import InputTooLargeError, UnsupportedEncodingError, ValidationError
from .stl_ascii import decode_ascii_stl
from .stl_binary import decode_binary_stl

logger = logging.getLogger(__name__)

ASCII_SIGNATURE = "solid"

def detect_encoding(buffer: bytes) -> StlEncoding:
    """
    Classifies a buffer as text or binary STL from its first 5 bytes.

    The buffer is text-encoded iff those bytes read "solid" (any case).
    Nothing else is inspected, so a binary file whose 80 byte header happens
    to begin with "solid" is reported as ASCII. That matches how STL files are
    told apart in practice and is a known limitation.
    """
    prefix = bytes(buffer[:5]).decode("ascii", errors="replace")
    if prefix.lower() == ASCII_SIGNATURE:
        return StlEncoding.ASCII
    return StlEncoding.BINARY

def validate_upload(buffer: bytes, max_bytes: int) -> None:
    """
    Checks an upload before any decoding work is done.

    Raises:
        ValidationError: If the payload is not a bytes-like object.
        UnsupportedEncodingError: If the payload is empty.
        InputTooLargeError: If the payload is larger than `max_bytes`.
    """
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise ValidationError(f"STL payload must be bytes, got {type(buffer).__name__}.")
    size = len(buffer)
    if size == 0:
        raise UnsupportedEncodingError("STL payload is empty; it is neither binary nor text STL.")
    if size > max_bytes:
        raise InputTooLargeError(f"STL payload is {size} bytes, above the {max_bytes} byte limit.")

def read_stl(buffer: bytes, mode: ParseMode = ParseMode.LENIENT,
             max_bytes: Optional[int] = None) -> Tuple[Mesh, StlEncoding]:
    """
    Sniffs and decodes an STL buffer.

    Args:
        buffer: Raw file contents (already base64-decoded by the caller).
        mode: Text decoder strictness. Ignored for binary payloads.
        max_bytes: Optional size bound, checked before decoding.

    Returns:
        (mesh, detected encoding)

    Raises:
        MalformedInputError, UnsupportedEncodingError, ValidationError
    """
    if max_bytes is not None:
        validate_upload(buffer, max_bytes)

    encoding = detect_encoding(buffer)
    logger.debug(f"Detected STL encoding: {encoding.value} ({len(buffer)} bytes)")
    if encoding == StlEncoding.ASCII:
        mesh = decode_ascii_stl(buffer, mode=mode)
    else:
        mesh = decode_binary_stl(buffer)
    return mesh, encoding
