"""
Voltage Levels Area Module
==========================

This module defines the VoltageLevelsArea, a network area made of an explicit
list of voltage levels.

A bus belongs to the voltage level named in its ``voltage_level`` column, or
forms a voltage level of its own when that column is absent or empty. The
ids passed to the constructor are checked against the levels of the network.
"""

from typing import FrozenSet, Hashable, Iterable

import pandapower as pp

from area.border_area import InferredBorderArea
from network.network_model import get_bus_voltage_level, get_voltage_levels


class VoltageLevelsArea(InferredBorderArea):
    """
    Network area selected by voltage level.

    Attributes
    ----------
    voltage_levels : FrozenSet[Hashable]
        Selected voltage-level ids.
    """

    def __init__(self, net: pp.pandapowerNet, voltage_levels: Iterable[Hashable]) -> None:
        super().__init__(net)
        self.voltage_levels: FrozenSet[Hashable] = frozenset(voltage_levels)
        unknown = self.voltage_levels - get_voltage_levels(net)
        if unknown:
            raise ValueError(
                f"Unknown voltage levels: {sorted(map(str, unknown))}."
            )

    def _is_inside(self, bus: int) -> bool:
        return get_bus_voltage_level(self.net, bus) in self.voltage_levels

    def __repr__(self) -> str:
        return f"VoltageLevelsArea(voltage_levels={sorted(map(str, self.voltage_levels))})"
