#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the area definitions and their create(net) factory.
"""

from __future__ import annotations

import pytest

from area.control_area import ControlArea
from area.country_area import CountryArea
from area.definitions import (
    ControlAreaDefinition,
    CountryAreaDefinition,
    NetworkAreaDefinition,
    VoltageLevelsAreaDefinition,
)
from area.voltage_levels_area import VoltageLevelsArea
from core.exceptions import UndefinedBoundaryError
from network.elements import Boundary, Terminal


class TestControlAreaDefinition:
    """Control-area definitions by name and by explicit tie flows."""

    def test_needs_name_or_tie_flow(self):
        with pytest.raises(UndefinedBoundaryError):
            ControlAreaDefinition()

    def test_create_by_name(self, chain_net):
        area = ControlAreaDefinition(control_area_name="CHAIN").create(chain_net)
        assert isinstance(area, ControlArea)
        assert area.net_position() == pytest.approx(120.0)

    def test_create_by_explicit_sets(self, chain_net):
        definition = ControlAreaDefinition(
            terminals=[Terminal("line", 0, "to")],
            boundaries=[Boundary("line", 4, "to")],
        )
        assert isinstance(definition.terminals, frozenset)
        assert definition.create(chain_net).contained_buses() == {1, 2, 3, 4}

    def test_unknown_name_fails_at_create(self, chain_net):
        definition = ControlAreaDefinition(control_area_name="missing")
        with pytest.raises(UndefinedBoundaryError):
            definition.create(chain_net)

    def test_name_and_explicit_sets_are_merged(self, chain_net):
        extra = Terminal("line", 3, "from")
        definition = ControlAreaDefinition(control_area_name="CHAIN", terminals=[extra])
        terminals, boundaries = definition.resolve(chain_net)
        assert extra in terminals
        assert Terminal("line", 0, "to") in terminals
        assert boundaries == {Boundary("line", 4, "to")}

    def test_wrong_type_raises(self):
        with pytest.raises(TypeError):
            ControlAreaDefinition(terminals=[("line", 0, "to")])

    def test_is_frozen_and_reusable(self, chain_net):
        definition = ControlAreaDefinition(control_area_name="CHAIN")
        with pytest.raises(AttributeError):
            definition.control_area_name = "OTHER"
        first = definition.create(chain_net)
        second = definition.create(chain_net)
        assert first is not second
        assert first.contained_buses() == second.contained_buses()


class TestInferredDefinitions:
    """Country and voltage-level definitions."""

    def test_country_definition(self, two_country_line_net):
        definition = CountryAreaDefinition(frozenset({"FR"}))
        area = definition.create(two_country_line_net)
        assert isinstance(area, CountryArea)
        assert area.net_position() == pytest.approx(47.5)

    def test_country_definition_accepts_string(self):
        assert CountryAreaDefinition("BE").countries == {"BE"}

    def test_empty_country_definition_raises(self):
        with pytest.raises(ValueError):
            CountryAreaDefinition(frozenset())

    def test_voltage_levels_definition(self, trafo3w_net):
        definition = VoltageLevelsAreaDefinition(["VL_HV"])
        area = definition.create(trafo3w_net)
        assert isinstance(area, VoltageLevelsArea)
        assert definition.voltage_levels == {"VL_HV"}
        assert area.net_position() == pytest.approx(99.5)

    def test_all_definitions_share_the_interface(self):
        for cls in (ControlAreaDefinition, CountryAreaDefinition, VoltageLevelsAreaDefinition):
            assert issubclass(cls, NetworkAreaDefinition)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
