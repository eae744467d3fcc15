#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Net Positions of the Two-Country Benchmark
==========================================

This script builds the two-country benchmark network and reports, on its
converged operating point:

    - the net position of each country (inferred borders)
    - the net position of each registered control area (explicit tie flows)
    - the net position of the FR 380 kV voltage levels
    - the mismatch of every control area against a target net position
      and the share of that mismatch each BE load would take

Sign convention: positive = export, negative = import.

Nothing is adjusted; the balance-adjustment loop is not part of this
project.
"""

from __future__ import annotations

from typing import List

import pandapower as pp

# -- project imports -----------------------------------------------------------
from network.build_benchmark_net import build_benchmark_net, BE_CONTROL_AREA
from network.control_areas import get_control_area_names
from network.network_model import COUNTRY_COLUMN, VOLTAGE_LEVEL_COLUMN
from area.definitions import (
    ControlAreaDefinition,
    CountryAreaDefinition,
    VoltageLevelsAreaDefinition,
)
from area.util import (
    contains_several_synchronous_components,
    create_conform_load_scalable,
)
from balance.parameters import BalanceComputationParameters
from balance.balance_area import BalanceComputationArea


def _print_header(title: str) -> None:
    print()
    print("=" * 72)
    print(f"  {title}")
    print("=" * 72)


def report_net_positions(net: pp.pandapowerNet) -> None:
    """Print the net position of every country and control area of *net*."""
    _print_header("COUNTRY AREAS")
    total = 0.0
    for country in ("FR", "BE"):
        area = CountryAreaDefinition(frozenset({country})).create(net)
        np_mw = area.net_position()
        total += np_mw
        print(f"  {country:<4s} net position = {np_mw:9.3f} MW   "
              f"({len(area.contained_buses())} buses)")
    print(f"  Sum  (= flow into X-nodes) = {total:9.3f} MW")

    _print_header("CONTROL AREAS")
    for name in get_control_area_names(net):
        if contains_several_synchronous_components(net, name):
            print(f"  {name}: spans several synchronous components, skipped")
            continue
        area = ControlAreaDefinition(control_area_name=name).create(net)
        print(f"  {name} net position = {area.net_position():9.3f} MW   "
              f"({len(area.contained_buses())} buses)")

    _print_header("VOLTAGE LEVELS AREA (FR 380 kV)")
    fr_ehv = {
        vl for vl, vn_kv, country in zip(
            net.bus[VOLTAGE_LEVEL_COLUMN], net.bus["vn_kv"], net.bus[COUNTRY_COLUMN]
        )
        if country == "FR" and vn_kv == 380.0
    }
    area = VoltageLevelsAreaDefinition(frozenset(fr_ehv)).create(net)
    print(f"  Voltage levels: {sorted(area.contained_nodes())}")
    print(f"  Net position   = {area.net_position():9.3f} MW")


def report_mismatch(net: pp.pandapowerNet, target_be_mw: float) -> None:
    """Print how far BE is from *target_be_mw* and how the gap would be shared."""
    parameters = BalanceComputationParameters()
    definition = ControlAreaDefinition(control_area_name=BE_CONTROL_AREA)
    scalable = create_conform_load_scalable(net, definition.create(net))
    balance_area = BalanceComputationArea(
        name="BE", area_definition=definition,
        scalable=scalable, target_net_position=target_be_mw,
    )

    _print_header(f"BE MISMATCH AGAINST TARGET {target_be_mw:.1f} MW")
    mismatch = balance_area.mismatch(net)
    balanced = abs(mismatch) < parameters.threshold_net_position
    print(f"  Mismatch = {mismatch:9.3f} MW   "
          f"(threshold {parameters.threshold_net_position:.1f} MW, "
          f"{'balanced' if balanced else 'not balanced'})")
    shares = scalable.distribute(mismatch)
    lines: List[str] = [
        f"    load {idx:3d} ({net.load.at[idx, 'name']}): {share:8.3f} MW"
        for idx, share in shares.items()
    ]
    print("  Injection change per load (generator convention):")
    print("\n".join(lines))


def main() -> None:
    """Build the benchmark network and report its net positions."""
    print("Building two-country benchmark network ...")
    net, _ = build_benchmark_net()
    report_net_positions(net)
    report_mismatch(net, target_be_mw=0.0)
    print()


if __name__ == "__main__":
    main()
