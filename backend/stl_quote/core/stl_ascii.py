# core/stl_ascii.py

import re
import math
import logging
from typing import List, Optional, Tuple

import numpy as np

from .common_types import Mesh, ParseMode
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

# Optional sign, optional fractional part, optional exponent. No nan/inf/underscores.
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

class _BlockError(Exception):
    """Internal signal that the facet block starting at a token index is malformed."""
    pass

def _parse_number(tokens: List[str], i: int) -> float:
    if i >= len(tokens) or not _NUMBER_RE.fullmatch(tokens[i]):
        found = tokens[i] if i < len(tokens) else "end of input"
        raise _BlockError(f"expected a number at token {i}, found '{found}'")
    value = float(tokens[i])
    if not math.isfinite(value):
        raise _BlockError(f"number at token {i} overflows a double: '{tokens[i]}'")
    return value

def _expect(tokens: List[str], i: int, keyword: str) -> None:
    if i >= len(tokens) or tokens[i].lower() != keyword:
        found = tokens[i] if i < len(tokens) else "end of input"
        raise _BlockError(f"expected '{keyword}' at token {i}, found '{found}'")

def _parse_facet_block(tokens: List[str], start: int) -> Tuple[List[float], List[List[float]], int]:
    """
    Parses one `facet normal ... endfacet` block whose `facet` token is at `start`.

    Returns:
        (normal, vertices, index of the token after `endfacet`). The vertex
        list may hold any number of vertices; the caller decides what to do
        with a count other than three.
    """
    i = start + 2 # Skip 'facet normal'
    normal = [_parse_number(tokens, i + k) for k in range(3)]
    i += 3
    _expect(tokens, i, "outer")
    _expect(tokens, i + 1, "loop")
    i += 2

    vertices: List[List[float]] = []
    while i < len(tokens) and tokens[i].lower() == "vertex":
        vertices.append([_parse_number(tokens, i + 1 + k) for k in range(3)])
        i += 4
    if not vertices:
        raise _BlockError(f"facet at token {start} has no vertex lines")

    _expect(tokens, i, "endloop")
    _expect(tokens, i + 1, "endfacet")
    return normal, vertices, i + 2

def _is_block_start(tokens: List[str], i: int) -> bool:
    return tokens[i].lower() == "facet" and i + 1 < len(tokens) and tokens[i + 1].lower() == "normal"

def decode_ascii_stl(buffer: bytes, mode: ParseMode = ParseMode.LENIENT) -> Mesh:
    """
    Parses a text STL payload into a Mesh.

    The decoder scans the whitespace-separated token stream for blocks of the
    form ``facet normal nx ny nz outer loop (vertex x y z)+ endloop endfacet``
    (keywords case-insensitive). Tokens outside such blocks, including the
    ``solid name`` / ``endsolid name`` wrapper, are ignored.

    A block is accepted only if it parses and has exactly three vertices.
    In lenient mode any other block is dropped and scanning resumes after its
    ``facet`` token. In strict mode it fails the parse.

    Args:
        buffer: The complete file contents.
        mode: ParseMode.LENIENT or ParseMode.STRICT.

    Returns:
        A Mesh with one facet per accepted block, in text order.

    Raises:
        MalformedInputError: In strict mode, on the first malformed block.
    """
    mode = ParseMode(mode)
    text = bytes(buffer).decode("utf-8", errors="replace")
    tokens = text.split()

    normals: List[List[float]] = []
    triangles: List[List[List[float]]] = []
    dropped = 0

    i = 0
    while i < len(tokens):
        if not _is_block_start(tokens, i):
            i += 1
            continue

        problem: Optional[str] = None
        try:
            normal, vertices, next_i = _parse_facet_block(tokens, i)
            if len(vertices) != 3:
                problem = f"facet at token {i} has {len(vertices)} vertices, expected 3"
        except _BlockError as e:
            problem = str(e)

        if problem is None:
            normals.append(normal)
            triangles.append(vertices)
            i = next_i
            continue

        if mode == ParseMode.STRICT:
            raise MalformedInputError(f"Malformed ASCII STL: {problem}.")
        logger.debug(f"Dropping malformed facet block: {problem}")
        dropped += 1
        i += 1

    if dropped:
        logger.info(f"ASCII STL parse dropped {dropped} malformed facet block(s).")

    if not triangles:
        return Mesh.empty()
    return Mesh(np.array(normals), np.array(triangles))
