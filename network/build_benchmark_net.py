#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Benchmark Network Builder — Two-Country Cross-Border Grid
=========================================================

Builds a small 380/110/20 kV two-country network covering every element
family the area computations distinguish.

Network topology
----------------
* FR: 4 EHV buses at 380 kV (FR|Bus_0 … FR|Bus_3); FR|Bus_2 and FR|Bus_3
  form one double-busbar voltage level joined by a bus-bus coupler
* FR: one 380/110/20 kV 3-winding transformer feeding a 110 kV and a 20 kV
  bus
* BE: 3 EHV buses at 380 kV (BE|Bus_0 … BE|Bus_2) and one 110 kV bus
  behind a 2-winding transformer
* Two X-nodes (boundary buses, no country)

Cross-border elements
---------------------
* Tie line      FR|Bus_1 - X|FR-BE - BE|Bus_0 (two half-lines)
* AC line       FR|Bus_2 - BE|Bus_1 (with a line switch at the FR end)
* HVDC link     FR|Bus_1 → BE|Bus_1 (``net.dcline``)
* Dangling line BE|Bus_2 - X|BE-EXT, the X-node carrying an external load

Bus columns
-----------
``country``, ``voltage_level`` and ``boundary`` are added to ``net.bus``.
Two control areas (one per country) are registered in
``net["control_area"]``.

Public API
----------
``build_benchmark_net(load_scaling, hvdc_p_mw)``
    → ``(pp.pandapowerNet, BenchmarkMetadata)``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pandapower as pp

from network.control_areas import create_control_area
from network.elements import Boundary, Terminal
from network.network_model import BOUNDARY_COLUMN, COUNTRY_COLUMN, VOLTAGE_LEVEL_COLUMN


# ═══════════════════════════════════════════════════════════════════════════════
#  NETWORK METADATA
# ═══════════════════════════════════════════════════════════════════════════════

FR_CONTROL_AREA = "10YFR-RTE------C"
BE_CONTROL_AREA = "10YBE----------2"


@dataclass(frozen=True)
class BenchmarkMetadata:
    """Structured record of the element indices created during the build.

    Attributes
    ----------
    fr_buses, be_buses : list[int]
        Network buses of each country (all voltage levels).
    xnode_buses : list[int]
        Boundary buses, ``[tie-line X-node, dangling-line X-node]``.
    tie_line_halves : list[int]
        ``net.line`` indices of the FR half and the BE half of the tie line.
    dangling_line : int
        ``net.line`` index of the dangling line.
    cross_border_line : int
        ``net.line`` index of the plain FR–BE line.
    dcline : int
        ``net.dcline`` index of the HVDC link.
    trafo3w : int
        ``net.trafo3w`` index of the FR 3-winding transformer.
    trafo : int
        ``net.trafo`` index of the BE 2-winding transformer.
    bus_bus_switch : int
        ``net.switch`` index of the FR busbar coupler.
    line_switch : int
        ``net.switch`` index at the FR end of the cross-border line.
    external_load : int
        ``net.load`` index of the load sitting at the dangling X-node.
    """

    fr_buses: List[int] = field(default_factory=list)
    be_buses: List[int] = field(default_factory=list)
    xnode_buses: List[int] = field(default_factory=list)
    tie_line_halves: List[int] = field(default_factory=list)
    dangling_line: int = -1
    cross_border_line: int = -1
    dcline: int = -1
    trafo3w: int = -1
    trafo: int = -1
    bus_bus_switch: int = -1
    line_switch: int = -1
    external_load: int = -1


# ═══════════════════════════════════════════════════════════════════════════════
#  CONFIGURATION CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════════

_EHV_LINE_TYPE = "490-AL1/64-ST1A 380.0"

# name → (vn_kv, country, voltage level, boundary)
_BUSES: Dict[str, Tuple[float, object, str, bool]] = {
    "FR|Bus_0": (380.0, "FR", "FR|VL_0", False),
    "FR|Bus_1": (380.0, "FR", "FR|VL_1", False),
    "FR|Bus_2": (380.0, "FR", "FR|VL_2", False),
    "FR|Bus_3": (380.0, "FR", "FR|VL_2", False),
    "FR|Bus_110": (110.0, "FR", "FR|VL_110", False),
    "FR|Bus_20": (20.0, "FR", "FR|VL_20", False),
    "BE|Bus_0": (380.0, "BE", "BE|VL_0", False),
    "BE|Bus_1": (380.0, "BE", "BE|VL_1", False),
    "BE|Bus_2": (380.0, "BE", "BE|VL_2", False),
    "BE|Bus_110": (110.0, "BE", "BE|VL_110", False),
    "X|FR-BE": (380.0, None, "X|FR-BE", True),
    "X|BE-EXT": (380.0, None, "X|BE-EXT", True),
}

# (from, to, length_km) of the in-country EHV lines.
_INTERNAL_LINES: List[Tuple[str, str, float]] = [
    ("FR|Bus_0", "FR|Bus_1", 60.0),
    ("FR|Bus_1", "FR|Bus_2", 50.0),
    ("FR|Bus_0", "FR|Bus_3", 80.0),
    ("BE|Bus_0", "BE|Bus_1", 40.0),
    ("BE|Bus_1", "BE|Bus_2", 50.0),
    ("BE|Bus_0", "BE|Bus_2", 70.0),
]

# 3-winding transformer nameplate data (380/110/20 kV).
_TR3W: Dict[str, float] = {
    "sn_hv_mva": 300.0,
    "sn_mv_mva": 300.0,
    "sn_lv_mva": 75.0,
    "vn_hv_kv": 380.0,
    "vn_mv_kv": 110.0,
    "vn_lv_kv": 20.0,
    "vk_hv_percent": 18.6,
    "vk_mv_percent": 10.0,
    "vk_lv_percent": 15.1,
    "vkr_hv_percent": 0.26,
    "vkr_mv_percent": 0.16,
    "vkr_lv_percent": 0.16,
    "pfe_kw": 91.9,
    "i0_percent": 0.036,
}


# ═══════════════════════════════════════════════════════════════════════════════
#  BUS, LINE, AND ELEMENT CREATION
# ═══════════════════════════════════════════════════════════════════════════════

def _bus(net: pp.pandapowerNet, name: str) -> int:
    return int(pp.get_element_index(net, "bus", name))


def _create_buses(net: pp.pandapowerNet) -> None:
    """Create all buses and tag them with country, voltage level and X-node flag."""
    for name, (vn_kv, _, _, _) in _BUSES.items():
        pp.create_bus(net, vn_kv=vn_kv, name=name, type="b")

    net.bus[COUNTRY_COLUMN] = [_BUSES[n][1] for n in net.bus["name"]]
    net.bus[VOLTAGE_LEVEL_COLUMN] = [_BUSES[n][2] for n in net.bus["name"]]
    net.bus[BOUNDARY_COLUMN] = [_BUSES[n][3] for n in net.bus["name"]]


def _create_line(net: pp.pandapowerNet, f: str, t: str, length_km: float, name: str) -> int:
    return pp.create_line(
        net,
        from_bus=_bus(net, f),
        to_bus=_bus(net, t),
        length_km=length_km,
        std_type=_EHV_LINE_TYPE,
        name=name,
    )


def _create_lines(net: pp.pandapowerNet) -> Dict[str, object]:
    """Create internal lines, the tie line halves, the cross-border and the dangling line."""
    for f, t, length_km in _INTERNAL_LINES:
        _create_line(net, f, t, length_km, f"Line_({f}-{t})")

    # The BE half runs from the X-node so that both boundary sides occur.
    fr_half = _create_line(net, "FR|Bus_1", "X|FR-BE", 40.0, "TieLine|FR-half")
    be_half = _create_line(net, "X|FR-BE", "BE|Bus_0", 35.0, "TieLine|BE-half")
    cross = _create_line(net, "FR|Bus_2", "BE|Bus_1", 90.0, "Line_(FR|Bus_2-BE|Bus_1)")
    dangling = _create_line(net, "BE|Bus_2", "X|BE-EXT", 30.0, "DanglingLine|BE-EXT")

    return dict(
        tie_line_halves=[fr_half, be_half],
        cross_border_line=cross,
        dangling_line=dangling,
    )


def _create_switches(net: pp.pandapowerNet, cross_border_line: int) -> Dict[str, int]:
    """Create the FR busbar coupler and a line switch on the cross-border line."""
    coupler = pp.create_switch(
        net, bus=_bus(net, "FR|Bus_2"), element=_bus(net, "FR|Bus_3"),
        et="b", closed=True, type="CB", name="FR|Coupler_2-3",
    )
    line_switch = pp.create_switch(
        net, bus=_bus(net, "FR|Bus_2"), element=cross_border_line,
        et="l", closed=True, type="CB", name="FR|LineSwitch_cross_border",
    )
    return dict(bus_bus_switch=coupler, line_switch=line_switch)


def _create_transformers(net: pp.pandapowerNet) -> Dict[str, int]:
    """Create the FR 3-winding and the BE 2-winding transformer."""
    trafo3w = pp.create_transformer3w_from_parameters(
        net,
        hv_bus=_bus(net, "FR|Bus_3"),
        mv_bus=_bus(net, "FR|Bus_110"),
        lv_bus=_bus(net, "FR|Bus_20"),
        name="FR|Trafo3w_380-110-20",
        **_TR3W,
    )
    trafo = pp.create_transformer(
        net,
        hv_bus=_bus(net, "BE|Bus_2"),
        lv_bus=_bus(net, "BE|Bus_110"),
        std_type="160 MVA 380/110 kV",
        name="BE|Trafo_380-110",
    )
    return dict(trafo3w=trafo3w, trafo=trafo)


def _create_injections(net: pp.pandapowerNet, load_scaling: float) -> int:
    """Create slack, generator, static generator and loads.

    Returns the index of the load at the dangling-line X-node.
    """
    pp.create_ext_grid(net, bus=_bus(net, "FR|Bus_0"), vm_pu=1.0, va_degree=0.0,
                       name="FR|External grid")
    pp.create_gen(net, bus=_bus(net, "BE|Bus_0"), p_mw=450.0, vm_pu=1.0,
                  sn_mva=600.0, name="BE|PP_0")
    pp.create_sgen(net, bus=_bus(net, "FR|Bus_110"), p_mw=30.0, q_mvar=0.0,
                   sn_mva=30.0, type="WP", name="FR|Wind_0")

    for name, p_mw in [
        ("FR|Bus_1", 200.0), ("FR|Bus_110", 150.0), ("FR|Bus_20", 20.0),
        ("BE|Bus_1", 300.0), ("BE|Bus_2", 150.0), ("BE|Bus_110", 80.0),
    ]:
        pp.create_load(net, bus=_bus(net, name), p_mw=p_mw * load_scaling,
                       q_mvar=0.1 * p_mw * load_scaling, name=f"Load|{name}")

    return pp.create_load(net, bus=_bus(net, "X|BE-EXT"), p_mw=50.0 * load_scaling,
                          q_mvar=0.0, name="Load|X|BE-EXT")


def _register_control_areas(net: pp.pandapowerNet, meta_data: Dict[str, object]) -> None:
    """Register one control area per country, cut at every cross-border element."""
    fr_half, be_half = meta_data["tie_line_halves"]
    cross = meta_data["cross_border_line"]
    dcline = meta_data["dcline"]
    dangling = meta_data["dangling_line"]

    create_control_area(
        net, FR_CONTROL_AREA,
        terminals=[Terminal("line", cross, "from"), Terminal("dcline", dcline, "from")],
        boundaries=[Boundary("line", fr_half, "to")],
    )
    create_control_area(
        net, BE_CONTROL_AREA,
        terminals=[Terminal("line", cross, "to"), Terminal("dcline", dcline, "to")],
        boundaries=[Boundary("line", be_half, "from"), Boundary("line", dangling, "to")],
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  PUBLIC ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════

def build_benchmark_net(
    *,
    load_scaling: float = 1.0,
    hvdc_p_mw: float = 100.0,
) -> Tuple[pp.pandapowerNet, BenchmarkMetadata]:
    """Build the two-country cross-border benchmark network.

    Parameters
    ----------
    load_scaling : float
        Multiplicative scaling factor applied to every load.
    hvdc_p_mw : float
        Active-power setpoint of the HVDC link from FR to BE [MW].

    Returns
    -------
    net : pp.pandapowerNet
        Converged network.
    meta : BenchmarkMetadata
        Immutable record of the created element indices.

    Raises
    ------
    pandapower.powerflow.LoadflowNotConverged
        If the initial power flow does not converge.
    """
    net = pp.create_empty_network(name="two-country benchmark")

    _create_buses(net)
    meta_data: Dict[str, object] = {}
    meta_data.update(_create_lines(net))
    meta_data.update(_create_switches(net, meta_data["cross_border_line"]))
    meta_data.update(_create_transformers(net))
    meta_data["external_load"] = _create_injections(net, load_scaling)
    meta_data["dcline"] = pp.create_dcline(
        net,
        from_bus=_bus(net, "FR|Bus_1"), to_bus=_bus(net, "BE|Bus_1"),
        p_mw=hvdc_p_mw, loss_percent=1.0, loss_mw=0.5,
        vm_from_pu=1.0, vm_to_pu=1.0, name="HVDC|FR-BE",
    )

    _register_control_areas(net, meta_data)

    countries = net.bus[COUNTRY_COLUMN]
    meta = BenchmarkMetadata(
        fr_buses=[int(b) for b in net.bus.index[countries == "FR"]],
        be_buses=[int(b) for b in net.bus.index[countries == "BE"]],
        xnode_buses=[_bus(net, "X|FR-BE"), _bus(net, "X|BE-EXT")],
        **meta_data,
    )

    pp.runpp(net, calculate_voltage_angles=True)

    return net, meta
