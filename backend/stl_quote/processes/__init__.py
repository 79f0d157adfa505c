# processes/__init__.py

# This file makes the 'processes' directory a Python package.

from . import print_3d
from .print_3d import Print3DProcessor

__all__ = [
    "print_3d",
    "Print3DProcessor",
]
