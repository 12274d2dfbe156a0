"""
aka_platform package initializer.
"""

from . import resolver
from . import storage

__all__ = ["resolver", "storage"]
