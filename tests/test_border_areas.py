#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the Inferred-Border Areas
===================================

Covers:
* ``CountryArea`` — branch averaging, NaN and disconnected terminals,
  untagged buses and transformer legs, partition of the benchmark network,
  cache reset.
* ``VoltageLevelsArea`` — 3-winding transformer legs, HVDC borders, unknown
  ids, partition of the benchmark network, cache reset.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pandapower as pp
import pytest

from area.country_area import CountryArea
from area.voltage_levels_area import VoltageLevelsArea
from network.elements import Terminal
from network.network_model import get_terminal_flow, get_voltage_levels


def _dangling_flow(net, meta) -> float:
    return get_terminal_flow(net, Terminal("line", meta.dangling_line, "from"))


# ═══════════════════════════════════════════════════════════════════════════════
#  COUNTRY AREA
# ═══════════════════════════════════════════════════════════════════════════════

class TestCountryArea:
    """Country areas on hand-built and benchmark networks."""

    def test_branch_direct_flow_is_averaged(self, two_country_line_net):
        assert CountryArea(two_country_line_net, ["FR"]).net_position() == pytest.approx(47.5)

    def test_inside_side2_flips_sign(self, two_country_line_net):
        assert CountryArea(two_country_line_net, ["BE"]).net_position() == pytest.approx(-47.5)

    def test_nan_terminal_counts_as_zero(self, two_country_line_net):
        two_country_line_net.res_line.at[0, "p_to_mw"] = np.nan
        assert CountryArea(two_country_line_net, ["FR"]).net_position() == pytest.approx(25.0)

    def test_disconnected_terminal_counts_as_zero(self, two_country_line_net):
        pp.create_switch(two_country_line_net, bus=1, element=0, et="l", closed=False)
        assert CountryArea(two_country_line_net, ["FR"]).net_position() == pytest.approx(25.0)

    def test_untagged_end_is_not_a_border(self, two_country_line_net):
        two_country_line_net.bus.at[1, "country"] = None
        area = CountryArea(two_country_line_net, ["FR"])
        assert area.branch_borders() == []
        assert area.net_position() == 0.0

    def test_trafo3w_with_untagged_leg_is_not_a_border(self, trafo3w_net):
        trafo3w_net.bus["country"] = ["FR", "BE", None]
        fr = CountryArea(trafo3w_net, ["FR"])
        be = CountryArea(trafo3w_net, ["BE"])
        assert fr.three_windings_transformer_borders() == []
        assert be.three_windings_transformer_borders() == []
        assert fr.net_position() == 0.0
        assert be.net_position() == 0.0

    def test_trafo3w_with_tagged_legs_is_a_border(self, trafo3w_net):
        trafo3w_net.bus["country"] = ["FR", "BE", "BE"]
        area = CountryArea(trafo3w_net, ["FR"])
        assert len(area.three_windings_transformer_borders()) == 1
        assert area.net_position() == pytest.approx(99.5)

    def test_single_string_country(self, two_country_line_net):
        assert CountryArea(two_country_line_net, "FR").countries == {"FR"}

    def test_empty_countries_raise(self, two_country_line_net):
        with pytest.raises(ValueError):
            CountryArea(two_country_line_net, [])

    def test_contained_nodes_are_voltage_levels(self, two_country_line_net):
        area = CountryArea(two_country_line_net, ["BE"])
        assert area.contained_buses() == {1}
        assert area.contained_nodes() == {"BE|VL"}
        assert area.contained_nodes() is area.contained_nodes()

    def test_benchmark_borders(self, benchmark):
        net, meta = benchmark
        area = CountryArea(net, ["FR"])
        assert [b.index for b in area.branch_borders()] == [meta.cross_border_line]
        assert len(area.tie_line_borders()) == 1
        assert [h.index for h in area.hvdc_line_borders()] == [meta.dcline]
        assert area.three_windings_transformer_borders() == []
        assert area.dangling_line_borders() == []
        assert len(CountryArea(net, ["BE"]).dangling_line_borders()) == 1

    def test_benchmark_contained_buses(self, benchmark):
        net, meta = benchmark
        assert CountryArea(net, ["FR"]).contained_buses() == set(meta.fr_buses)
        assert CountryArea(net, ["FR", "BE"]).contained_buses() == \
            set(meta.fr_buses) | set(meta.be_buses)

    def test_partition_sums_to_flow_leaving_through_xnodes(self, benchmark):
        net, meta = benchmark
        fr = CountryArea(net, ["FR"]).net_position()
        be = CountryArea(net, ["BE"]).net_position()
        assert fr + be == pytest.approx(_dangling_flow(net, meta), abs=1e-9)

    def test_partition_without_dangling_line_sums_to_zero(self, benchmark_copy):
        net, meta = benchmark_copy
        net.line.at[meta.dangling_line, "in_service"] = False
        fr = CountryArea(net, ["FR"]).net_position()
        be = CountryArea(net, ["BE"]).net_position()
        assert fr + be == pytest.approx(0.0, abs=1e-9)

    def test_reset_cache_picks_up_new_tags(self, benchmark_copy):
        net, meta = benchmark_copy
        area = CountryArea(net, ["FR"])
        assert len(area.branch_borders()) == 1
        be_bus = int(pp.get_element_index(net, "bus", "BE|Bus_1"))
        net.bus.at[be_bus, "country"] = "FR"
        assert len(area.branch_borders()) == 1
        area.reset_cache()
        assert all(b.index != meta.cross_border_line for b in area.branch_borders())
        assert be_bus in area.contained_buses()


# ═══════════════════════════════════════════════════════════════════════════════
#  VOLTAGE LEVELS AREA
# ═══════════════════════════════════════════════════════════════════════════════

class TestVoltageLevelsArea:
    """Voltage-level areas, including 3-winding transformer legs."""

    def test_trafo3w_one_leg_inside(self, trafo3w_net):
        area = VoltageLevelsArea(trafo3w_net, ["VL_HV"])
        assert len(area.three_windings_transformer_borders()) == 1
        # inside 100, outside -60 - 39
        assert area.net_position() == pytest.approx(99.5)

    def test_trafo3w_two_legs_inside(self, trafo3w_net):
        area = VoltageLevelsArea(trafo3w_net, ["VL_MV", "VL_LV"])
        assert area.net_position() == pytest.approx(-99.5)

    def test_trafo3w_all_legs_inside_is_not_a_border(self, trafo3w_net):
        area = VoltageLevelsArea(trafo3w_net, ["VL_HV", "VL_MV", "VL_LV"])
        assert area.three_windings_transformer_borders() == []
        assert area.net_position() == 0.0

    def test_trafo3w_disconnected_leg(self, trafo3w_net):
        trafo3w_net.bus.at[2, "in_service"] = False
        area = VoltageLevelsArea(trafo3w_net, ["VL_HV"])
        assert area.net_position() == pytest.approx(80.0)

    def test_unknown_voltage_level_raises(self, trafo3w_net):
        with pytest.raises(ValueError, match="Unknown voltage levels"):
            VoltageLevelsArea(trafo3w_net, ["VL_HV", "nope"])

    def test_contained_nodes(self, trafo3w_net):
        area = VoltageLevelsArea(trafo3w_net, ["VL_MV"])
        assert area.contained_nodes() == {"VL_MV"}
        assert area.contained_buses() == {1}

    def test_hvdc_border_flow_is_averaged(self):
        net = pp.create_empty_network()
        pp.create_bus(net, vn_kv=380.0)
        pp.create_bus(net, vn_kv=380.0)
        net.bus["voltage_level"] = ["VL_A", "VL_B"]
        pp.create_dcline(
            net, from_bus=0, to_bus=1, p_mw=100.0, loss_percent=1.0, loss_mw=0.5,
            vm_from_pu=1.0, vm_to_pu=1.0,
        )
        net.res_dcline = pd.DataFrame(
            {"p_from_mw": [100.0], "p_to_mw": [-98.5]}, index=net.dcline.index,
        )
        area_a = VoltageLevelsArea(net, ["VL_A"])
        area_b = VoltageLevelsArea(net, ["VL_B"])
        assert [h.index for h in area_a.hvdc_line_borders()] == [0]
        assert area_a.net_position() == pytest.approx(99.25)
        assert area_b.net_position() == pytest.approx(-99.25)

    def test_reset_cache_picks_up_new_voltage_levels(self, trafo3w_net):
        area = VoltageLevelsArea(trafo3w_net, ["VL_HV"])
        assert area.contained_buses() == {0}
        assert area.net_position() == pytest.approx(99.5)
        trafo3w_net.bus.at[1, "voltage_level"] = "VL_HV"
        assert area.contained_buses() == {0}
        area.reset_cache()
        assert area.contained_buses() == {0, 1}
        assert area.contained_nodes() == {"VL_HV"}
        # inside 100 - 60, outside -39
        assert area.net_position() == pytest.approx(39.5)

    def test_benchmark_partition(self, benchmark):
        net, meta = benchmark
        levels = sorted(vl for vl in get_voltage_levels(net) if not str(vl).startswith("X|"))
        inside = [vl for i, vl in enumerate(levels) if i % 2 == 0]
        outside = [vl for i, vl in enumerate(levels) if i % 2 == 1]
        total = (
            VoltageLevelsArea(net, inside).net_position()
            + VoltageLevelsArea(net, outside).net_position()
        )
        assert total == pytest.approx(_dangling_flow(net, meta), abs=1e-9)

    def test_benchmark_trafo3w_border(self, benchmark):
        net, meta = benchmark
        area = VoltageLevelsArea(net, ["FR|VL_110"])
        assert [t.index for t in area.three_windings_transformer_borders()] == [meta.trafo3w]
        # The 110 kV level only exchanges through the transformer.
        mv_flow = net.res_trafo3w.at[meta.trafo3w, "p_mv_mw"]
        hv_flow = net.res_trafo3w.at[meta.trafo3w, "p_hv_mw"]
        lv_flow = net.res_trafo3w.at[meta.trafo3w, "p_lv_mw"]
        assert area.net_position() == pytest.approx((mv_flow - hv_flow - lv_flow) / 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
