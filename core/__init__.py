"""
Core Module
============

Ambient building blocks shared by all other packages.

Classes
-------
NetworkAreaError
    Base class of all area errors.
UndefinedBoundaryError
    Raised when an area resolves to no terminal and no boundary.
MalformedAreaError
    Raised when a control area does not enclose exactly one component.

Functions
---------
get_logger
    Return a colour-formatted module logger.
"""

from core.exceptions import (
    NetworkAreaError,
    UndefinedBoundaryError,
    MalformedAreaError,
)
from core.logging import get_logger

__all__ = [
    "NetworkAreaError",
    "UndefinedBoundaryError",
    "MalformedAreaError",
    "get_logger",
]
