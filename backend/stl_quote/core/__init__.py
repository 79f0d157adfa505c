# core/__init__.py

# This file makes the 'core' directory a Python package.

from . import common_types
from . import exceptions
from . import geometry
from . import stl_reader
from . import utils

__all__ = [
    "common_types",
    "exceptions",
    "geometry",
    "stl_reader",
    "utils",
]
