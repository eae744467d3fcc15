"""
Exceptions Module
=================

Errors raised while resolving and instantiating network areas.

Both errors are raised at area-construction time (or at the first population
of an area cache) and are never retried by this package.
"""


class NetworkAreaError(Exception):
    """Base class for all network-area errors."""


class UndefinedBoundaryError(NetworkAreaError, ValueError):
    """
    An area definition resolves to an empty set of terminals and boundaries.

    Raised for instance when a control-area name is unknown to the network,
    or when a definition is created without any tie flow.
    """


class MalformedAreaError(NetworkAreaError, RuntimeError):
    """
    The boundary set of a control area does not enclose exactly one component.

    A net position summed over a boundary that touches several (or zero)
    topological components has no physical meaning. Callers shall split the
    area with :func:`area.util.split_by_synchronous_component` first.
    """
