#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared fixtures for the test suite.

Small hand-built networks carry hand-filled ``res_*`` tables so that exact
net positions can be asserted without running a power flow. The benchmark
network is built (and its power flow solved) once per session; tests that
modify it work on a deep copy.
"""

from __future__ import annotations

import copy

import pandas as pd
import pandapower as pp
import pytest

from network.build_benchmark_net import build_benchmark_net
from network.control_areas import create_control_area
from network.elements import Boundary, Terminal

EHV_LINE_TYPE = "490-AL1/64-ST1A 380.0"


def create_ehv_buses(net: pp.pandapowerNet, n_buses: int, **columns) -> None:
    """Create *n_buses* 380 kV buses and add per-bus tag columns."""
    for i in range(n_buses):
        pp.create_bus(net, vn_kv=380.0, name=f"Bus_{i}")
    for column, values in columns.items():
        net.bus[column] = values


def create_ehv_line(net: pp.pandapowerNet, f: int, t: int) -> int:
    return pp.create_line(net, from_bus=f, to_bus=t, length_km=10.0, std_type=EHV_LINE_TYPE)


# ═══════════════════════════════════════════════════════════════════════════════
#  HAND-BUILT NETWORKS
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def chain_net():
    """Five network buses in a chain plus one X-node behind bus 4.

    ::

        0 -line0- 1 -line1- 2 -line2- 3 -line3- 4 -line4- X(5)

    Control area ``"CHAIN"``: terminal at the bus-1 end of line 0
    (P = 100 MW) and boundary at the X-node end of line 4 (P = -20 MW).
    """
    net = pp.create_empty_network()
    create_ehv_buses(net, 6, boundary=[False] * 5 + [True])
    for f in range(5):
        create_ehv_line(net, f, f + 1)

    net.res_line = pd.DataFrame(
        {
            "p_from_mw": [-99.0, 60.0, 40.0, 30.0, 20.5],
            "p_to_mw": [100.0, -59.5, -39.8, -29.9, -20.0],
        },
        index=net.line.index,
    )
    create_control_area(
        net, "CHAIN",
        terminals=[Terminal("line", 0, "to")],
        boundaries=[Boundary("line", 4, "to")],
    )
    return net


@pytest.fixture
def two_country_line_net():
    """One line from an FR bus to a BE bus with P1 = 50 MW, P2 = -45 MW."""
    net = pp.create_empty_network()
    create_ehv_buses(net, 2, country=["FR", "BE"], voltage_level=["FR|VL", "BE|VL"])
    create_ehv_line(net, 0, 1)
    net.res_line = pd.DataFrame(
        {"p_from_mw": [50.0], "p_to_mw": [-45.0]}, index=net.line.index,
    )
    return net


@pytest.fixture
def trafo3w_net():
    """One 3-winding transformer, each leg in its own voltage level."""
    net = pp.create_empty_network()
    hv = pp.create_bus(net, vn_kv=380.0, name="HV")
    mv = pp.create_bus(net, vn_kv=110.0, name="MV")
    lv = pp.create_bus(net, vn_kv=20.0, name="LV")
    net.bus["voltage_level"] = ["VL_HV", "VL_MV", "VL_LV"]
    pp.create_transformer3w_from_parameters(
        net, hv_bus=hv, mv_bus=mv, lv_bus=lv,
        vn_hv_kv=380.0, vn_mv_kv=110.0, vn_lv_kv=20.0,
        sn_hv_mva=300.0, sn_mv_mva=300.0, sn_lv_mva=75.0,
        vk_hv_percent=18.6, vk_mv_percent=10.0, vk_lv_percent=15.1,
        vkr_hv_percent=0.26, vkr_mv_percent=0.16, vkr_lv_percent=0.16,
        pfe_kw=91.9, i0_percent=0.036,
    )
    net.res_trafo3w = pd.DataFrame(
        {"p_hv_mw": [100.0], "p_mv_mw": [-60.0], "p_lv_mw": [-39.0]},
        index=net.trafo3w.index,
    )
    return net


# ═══════════════════════════════════════════════════════════════════════════════
#  BENCHMARK NETWORK
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def benchmark():
    """Build the converged two-country benchmark once for the whole session."""
    return build_benchmark_net()


@pytest.fixture
def benchmark_copy(benchmark):
    """Deep copy of the benchmark network that a test may modify."""
    net, meta = benchmark
    return copy.deepcopy(net), meta
