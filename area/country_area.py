"""
Country Area Module
===================

This module defines the CountryArea, a network area made of every bus whose
``country`` tag belongs to a selected set of countries.

Buses without a country tag are never inside; a two-ended element touching
such a bus is not a border.
"""

from typing import FrozenSet, Iterable

import pandapower as pp

from area.border_area import InferredBorderArea
from network.network_model import get_bus_country


class CountryArea(InferredBorderArea):
    """
    Network area selected by country.

    Attributes
    ----------
    countries : FrozenSet[str]
        Selected country tags, e.g. {"FR", "BE"}.
    """

    def __init__(self, net: pp.pandapowerNet, countries: Iterable[str]) -> None:
        super().__init__(net)
        if isinstance(countries, str):
            countries = [countries]
        self.countries: FrozenSet[str] = frozenset(str(c) for c in countries)
        if not self.countries:
            raise ValueError("CountryArea requires at least one country.")

    def _is_inside(self, bus: int) -> bool:
        return get_bus_country(self.net, bus) in self.countries

    def _is_known(self, bus: int) -> bool:
        return get_bus_country(self.net, bus) is not None

    def __repr__(self) -> str:
        return f"CountryArea(countries={sorted(self.countries)})"
