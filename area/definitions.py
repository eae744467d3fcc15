"""
Area Definitions Module
=======================

This module defines the immutable area definitions and their factory
operation create(net).

A definition describes *which* part of the network forms an area; it holds
no network data and can be reused across snapshots. Calling create(net)
walks the live topology of one snapshot and returns the concrete
NetworkArea bound to it.

Definitions
-----------
ControlAreaDefinition
    A control-area name resolved through net["control_area"], or explicit
    terminal/boundary sets (or both, merged).
CountryAreaDefinition
    A set of country tags.
VoltageLevelsAreaDefinition
    A set of voltage-level ids.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Hashable, Optional

import pandapower as pp

from area.control_area import ControlArea
from area.country_area import CountryArea
from area.network_area import NetworkArea
from area.voltage_levels_area import VoltageLevelsArea
from core.exceptions import UndefinedBoundaryError
from network.control_areas import get_control_area
from network.elements import Boundary, Terminal


class NetworkAreaDefinition(ABC):
    """Immutable description of a network area."""

    @abstractmethod
    def create(self, net: pp.pandapowerNet) -> NetworkArea:
        """
        Instantiate the area against a network snapshot.

        Parameters
        ----------
        net : pp.pandapowerNet
            Solved network snapshot. It is only read.

        Returns
        -------
        NetworkArea
            Concrete area bound to *net*.
        """


@dataclass(frozen=True)
class ControlAreaDefinition(NetworkAreaDefinition):
    """
    Definition of a ControlArea.

    Attributes
    ----------
    control_area_name : str, optional
        Name looked up in the control-area table of the net.
    terminals : FrozenSet[Terminal]
        Explicit tie-flow terminals.
    boundaries : FrozenSet[Boundary]
        Explicit tie-flow boundaries.
    """
    control_area_name: Optional[str] = None
    terminals: FrozenSet[Terminal] = field(default_factory=frozenset)
    boundaries: FrozenSet[Boundary] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate the definition after initialisation."""
        object.__setattr__(self, "terminals", frozenset(self.terminals))
        object.__setattr__(self, "boundaries", frozenset(self.boundaries))
        for terminal in self.terminals:
            if not isinstance(terminal, Terminal):
                raise TypeError(f"Expected a Terminal, got {type(terminal).__name__}.")
        for boundary in self.boundaries:
            if not isinstance(boundary, Boundary):
                raise TypeError(f"Expected a Boundary, got {type(boundary).__name__}.")
        if self.control_area_name is None and not self.terminals and not self.boundaries:
            raise UndefinedBoundaryError(
                "A control area needs a name or at least one terminal or boundary."
            )

    def resolve(self, net: pp.pandapowerNet):
        """
        Return the tie flows of this definition on *net*.

        Returns
        -------
        tuple of (FrozenSet[Terminal], FrozenSet[Boundary])

        Raises
        ------
        UndefinedBoundaryError
            If both resolved sets are empty.
        """
        terminals, boundaries = self.terminals, self.boundaries
        if self.control_area_name is not None:
            mapped_terminals, mapped_boundaries = get_control_area(net, self.control_area_name)
            terminals = terminals | mapped_terminals
            boundaries = boundaries | mapped_boundaries
        if not terminals and not boundaries:
            raise UndefinedBoundaryError(
                f"Control area '{self.control_area_name}' resolves to no tie flow."
            )
        return terminals, boundaries

    def create(self, net: pp.pandapowerNet) -> ControlArea:
        terminals, boundaries = self.resolve(net)
        return ControlArea(net, terminals, boundaries)


@dataclass(frozen=True)
class CountryAreaDefinition(NetworkAreaDefinition):
    """Definition of a CountryArea by its country tags."""
    countries: FrozenSet[str]

    def __post_init__(self) -> None:
        countries = [self.countries] if isinstance(self.countries, str) else self.countries
        object.__setattr__(self, "countries", frozenset(countries))
        if not self.countries:
            raise ValueError("countries must not be empty")

    def create(self, net: pp.pandapowerNet) -> CountryArea:
        return CountryArea(net, self.countries)


@dataclass(frozen=True)
class VoltageLevelsAreaDefinition(NetworkAreaDefinition):
    """Definition of a VoltageLevelsArea by its voltage-level ids."""
    voltage_levels: FrozenSet[Hashable]

    def __post_init__(self) -> None:
        object.__setattr__(self, "voltage_levels", frozenset(self.voltage_levels))

    def create(self, net: pp.pandapowerNet) -> VoltageLevelsArea:
        return VoltageLevelsArea(net, self.voltage_levels)
