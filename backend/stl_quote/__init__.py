# stl_quote/__init__.py

# STL mesh analysis and 3D print pricing.

from . import core
from . import processes
from . import services

__all__ = [
    "core",
    "processes",
    "services",
]
