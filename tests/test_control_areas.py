#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the control-area mapping stored in ``net["control_area"]``.
"""

from __future__ import annotations

import pandapower as pp
import pytest

from network.build_benchmark_net import BE_CONTROL_AREA, FR_CONTROL_AREA
from network.control_areas import (
    CONTROL_AREA_TABLE,
    create_control_area,
    get_control_area,
    get_control_area_names,
)
from network.elements import Boundary, Terminal


class TestControlAreaMapping:
    """Create, resolve and list control areas."""

    def test_empty_network_has_no_control_area(self):
        net = pp.create_empty_network()
        assert get_control_area_names(net) == []
        assert get_control_area(net, "X") == (frozenset(), frozenset())

    def test_create_returns_row_indices(self):
        net = pp.create_empty_network()
        first = create_control_area(net, "A", terminals=[Terminal("load", 0)])
        second = create_control_area(
            net, "B",
            terminals=[Terminal("line", 1, "to")],
            boundaries=[Boundary("line", 2, "from")],
        )
        assert first == [0]
        assert second == [1, 2]
        assert len(net[CONTROL_AREA_TABLE]) == 3

    def test_round_trip_through_table(self):
        net = pp.create_empty_network()
        terminals = {Terminal("line", 1, "to"), Terminal("dcline", 0, "from")}
        boundaries = {Boundary("impedance", 3, "to")}
        create_control_area(net, "A", terminals, boundaries)
        create_control_area(net, "B", [Terminal("load", 5)])
        assert get_control_area(net, "A") == (frozenset(terminals), frozenset(boundaries))
        assert get_control_area_names(net) == ["A", "B"]

    def test_unknown_name_resolves_empty(self, chain_net):
        assert get_control_area(chain_net, "missing") == (frozenset(), frozenset())

    def test_wrong_item_type_raises(self):
        net = pp.create_empty_network()
        with pytest.raises(TypeError):
            create_control_area(net, "A", terminals=[Boundary("line", 0, "to")])
        with pytest.raises(TypeError):
            create_control_area(net, "A", boundaries=[("line", 0, "to")])

    def test_benchmark_registers_both_countries(self, benchmark):
        net, meta = benchmark
        assert get_control_area_names(net) == [FR_CONTROL_AREA, BE_CONTROL_AREA]
        terminals, boundaries = get_control_area(net, BE_CONTROL_AREA)
        assert Terminal("dcline", meta.dcline, "to") in terminals
        assert Boundary("line", meta.dangling_line, "to") in boundaries


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
