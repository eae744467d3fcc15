#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the Benchmark Network Builder
=======================================

Covers:
* ``build_benchmark_net`` — topology, bus tags, metadata, convergence.
"""

from __future__ import annotations

import pandas as pd
import pytest

from network.build_benchmark_net import (
    BE_CONTROL_AREA,
    FR_CONTROL_AREA,
    BenchmarkMetadata,
    build_benchmark_net,
)
from network.control_areas import get_control_area_names
from network.network_model import get_boundary_buses


# ═══════════════════════════════════════════════════════════════════════════════
#  build_benchmark_net TESTS
# ═══════════════════════════════════════════════════════════════════════════════

class TestBuildBenchmarkNet:
    """Tests for the two-country network builder."""

    def test_returns_converged_network(self, benchmark):
        net, _ = benchmark
        assert net.converged, "Initial power flow must converge."

    def test_returns_metadata(self, benchmark):
        _, meta = benchmark
        assert isinstance(meta, BenchmarkMetadata)

    def test_metadata_is_frozen(self, benchmark):
        _, meta = benchmark
        with pytest.raises(AttributeError):
            meta.dcline = 99

    # --- Bus tags ---

    def test_bus_counts_per_country(self, benchmark):
        _, meta = benchmark
        assert len(meta.fr_buses) == 6, f"Expected 6 FR buses, got {len(meta.fr_buses)}."
        assert len(meta.be_buses) == 4, f"Expected 4 BE buses, got {len(meta.be_buses)}."

    def test_xnodes_have_no_country(self, benchmark):
        net, meta = benchmark
        assert get_boundary_buses(net) == set(meta.xnode_buses)
        assert net.bus.loc[meta.xnode_buses, "country"].isna().all()

    def test_coupled_busbars_share_voltage_level(self, benchmark):
        net, meta = benchmark
        switch = net.switch.loc[meta.bus_bus_switch]
        assert switch["et"] == "b"
        vl = net.bus["voltage_level"]
        assert vl.at[int(switch["bus"])] == vl.at[int(switch["element"])]

    # --- Elements ---

    def test_cross_border_elements_exist(self, benchmark):
        net, meta = benchmark
        assert meta.dcline in net.dcline.index
        assert meta.trafo3w in net.trafo3w.index
        assert meta.trafo in net.trafo.index
        for idx in [meta.cross_border_line, meta.dangling_line, *meta.tie_line_halves]:
            assert idx in net.line.index, f"Line {idx} not in network."

    def test_control_areas_registered(self, benchmark):
        net, _ = benchmark
        assert get_control_area_names(net) == [FR_CONTROL_AREA, BE_CONTROL_AREA]

    # --- Operating point ---

    def test_ehv_voltages_plausible(self, benchmark):
        net, _ = benchmark
        ehv_buses = net.bus.index[net.bus["vn_kv"] == 380.0]
        vm = net.res_bus.loc[ehv_buses, "vm_pu"]
        assert vm.min() >= 0.90, f"EHV V_min = {vm.min():.4f} is too low."
        assert vm.max() <= 1.10, f"EHV V_max = {vm.max():.4f} is too high."

    def test_hvdc_transfers_setpoint(self, benchmark):
        net, meta = benchmark
        assert net.res_dcline.at[meta.dcline, "p_from_mw"] == pytest.approx(100.0)
        assert net.res_dcline.at[meta.dcline, "p_to_mw"] < 0

    def test_all_results_available(self, benchmark):
        net, _ = benchmark
        assert not pd.isna(net.res_line["p_from_mw"]).any()

    def test_load_scaling(self):
        net, meta = build_benchmark_net(load_scaling=0.5)
        assert net.converged
        assert net.load.at[meta.external_load, "p_mw"] == pytest.approx(25.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
