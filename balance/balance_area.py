"""
Balance Computation Area Module
===============================

This module defines BalanceComputationArea, the unit handled by the
balance-adjustment driver: an area definition, the scalable used to move
its net position and the net position to reach.
"""

from dataclasses import dataclass

import pandapower as pp

from area.definitions import NetworkAreaDefinition
from area.network_area import NetworkArea
from area.scalable import Scalable


@dataclass(frozen=True)
class BalanceComputationArea:
    """
    One area to be balanced.

    Attributes
    ----------
    name : str
        Display name of the area.
    area_definition : NetworkAreaDefinition
        Definition instantiated against each network snapshot.
    scalable : Scalable
        Injections moved to reach the target.
    target_net_position : float
        Target net position in MW (export positive).
    """
    name: str
    area_definition: NetworkAreaDefinition
    scalable: Scalable
    target_net_position: float

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must not be empty")
        if not isinstance(self.area_definition, NetworkAreaDefinition):
            raise TypeError(
                f"Expected a NetworkAreaDefinition, got {type(self.area_definition).__name__}."
            )
        if not isinstance(self.scalable, Scalable):
            raise TypeError(f"Expected a Scalable, got {type(self.scalable).__name__}.")
        object.__setattr__(self, "target_net_position", float(self.target_net_position))

    def create_area(self, net: pp.pandapowerNet) -> NetworkArea:
        """Instantiate the area definition against *net*."""
        return self.area_definition.create(net)

    def mismatch(self, net: pp.pandapowerNet) -> float:
        """Return target minus current net position in MW."""
        return self.target_net_position - self.create_area(net).net_position()
