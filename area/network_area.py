"""
Network Area Module
===================

This module defines the abstract base class shared by all network areas.

A network area answers two questions on a solved network snapshot:
    - What is inside the area? (contained nodes / buses)
    - What is its net position? (signed sum of flows crossing the border)

Sign convention of the net position, for every variant:
    positive = net export (flow leaving the area)
    negative = net import

Variants
--------
ControlArea
    Border given explicitly as tie-flow terminals and boundaries.
CountryArea
    Border inferred from country-tagged buses.
VoltageLevelsArea
    Border inferred from an explicit list of voltage levels.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Hashable

import pandapower as pp


class NetworkArea(ABC):
    """
    Abstract net-position provider bound to one network snapshot.

    An area is created once per (definition, network) pair. Its caches are
    owned by the instance and are only invalidated through reset_cache(),
    which the caller invokes when the network connectivity changes (a mere
    change of power values never invalidates them).

    Attributes
    ----------
    net : pp.pandapowerNet
        The network the area is bound to. It is never modified.
    """

    def __init__(self, net: pp.pandapowerNet) -> None:
        if net is None:
            raise ValueError("net must not be None")
        self.net = net

    @abstractmethod
    def net_position(self) -> float:
        """
        Compute the net position of the area in MW.

        Returns
        -------
        float
            Sum of the flows leaving the area (export positive).
        """

    @abstractmethod
    def contained_nodes(self) -> FrozenSet[Hashable]:
        """
        Return the topological nodes inside the area.

        Control areas return bus indices, inferred areas return voltage-level
        ids. The same cached object is returned until reset_cache().
        """

    @abstractmethod
    def contained_buses(self) -> FrozenSet[int]:
        """Return the in-service, non-boundary buses inside the area."""

    @abstractmethod
    def reset_cache(self) -> None:
        """Drop all cached topology so that it is recomputed on next use."""
