"""
Area Module
===========

Network areas, their definitions and the helpers built on top of them.

Classes
-------
NetworkArea
    Abstract net-position provider.
ControlArea
    Area delimited by explicit tie flows.
CountryArea, VoltageLevelsArea
    Areas delimited by a bus predicate.
ControlAreaDefinition, CountryAreaDefinition, VoltageLevelsAreaDefinition
    Immutable definitions with create(net).
LoadScalable, ProportionalScalable
    Load-based scalables.

Functions
---------
contains_several_synchronous_components
    Pre-check of a control area against AC islands.
split_by_synchronous_component
    One control-area definition per AC island.
create_load_scalables, create_conform_load_scalable
    Scalables over the loads of an area.
"""

from area.network_area import NetworkArea
from area.control_area import ControlArea
from area.border_area import InferredBorderArea
from area.country_area import CountryArea
from area.voltage_levels_area import VoltageLevelsArea
from area.definitions import (
    NetworkAreaDefinition,
    ControlAreaDefinition,
    CountryAreaDefinition,
    VoltageLevelsAreaDefinition,
)
from area.scalable import Scalable, LoadScalable, ProportionalScalable
from area.util import (
    contains_several_synchronous_components,
    split_by_synchronous_component,
    create_load_scalables,
    create_conform_load_scalable,
)

__all__ = [
    "NetworkArea",
    "ControlArea",
    "InferredBorderArea",
    "CountryArea",
    "VoltageLevelsArea",
    "NetworkAreaDefinition",
    "ControlAreaDefinition",
    "CountryAreaDefinition",
    "VoltageLevelsAreaDefinition",
    "Scalable",
    "LoadScalable",
    "ProportionalScalable",
    "contains_several_synchronous_components",
    "split_by_synchronous_component",
    "create_load_scalables",
    "create_conform_load_scalable",
]
