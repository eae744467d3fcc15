#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Network Model — Read-Only Accessors over a pandapower Net
=========================================================

Every quantity the area computations need is read here, and only here, from a
``pp.pandapowerNet`` holding a solved operating point.  Nothing in this module
writes to the net.

Conventions
-----------
* **Active power** follows the load convention: positive = power flowing from
  the bus into the equipment.  pandapower branch and load results already use
  it; generator-convention tables (``sgen``, ``gen``, ``ext_grid``) are
  negated.
* **Connected** means: element in service, its bus in service, and no open
  bus-element switch on that side.
* **X-nodes** are buses flagged in the ``boundary`` column.  A line or
  impedance ending at an X-node is a half-branch.  One half per X-node is a
  dangling line, two halves form a tie line.
* **Voltage levels** and **countries** are optional bus columns
  (``voltage_level``, ``country``).  Without a voltage-level value a bus is
  its own voltage level.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Hashable, Iterable, List, Optional, Set

import numpy as np
import pandas as pd
import pandapower as pp

from core.logging import get_logger
from network.elements import (
    GENERATOR_CONVENTION_ELEMENTS,
    HALF_BRANCH_ELEMENTS,
    OPPOSITE_SIDE,
    SIDE_BUS_COLUMNS,
    SIDE_P_COLUMNS,
    SWITCH_ELEMENT_TYPES,
    Boundary,
    Branch,
    DanglingLine,
    HvdcLine,
    Terminal,
    ThreeWindingsTransformer,
    TieLine,
)

logger = get_logger(__name__)

COUNTRY_COLUMN = "country"
VOLTAGE_LEVEL_COLUMN = "voltage_level"
BOUNDARY_COLUMN = "boundary"


# ═══════════════════════════════════════════════════════════════════════════════
#  TABLE HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _table(net: pp.pandapowerNet, name: str) -> pd.DataFrame:
    """Return ``net[name]`` or an empty frame if the table does not exist."""
    table = net.get(name)
    if not isinstance(table, pd.DataFrame):
        return pd.DataFrame()
    return table


def _flag(table: pd.DataFrame, index: int, column: str, default: bool) -> bool:
    """NaN-safe boolean lookup of ``table.at[index, column]``."""
    if column not in table.columns:
        return default
    value = table.at[index, column]
    if pd.isna(value):
        return default
    return bool(value)


# ═══════════════════════════════════════════════════════════════════════════════
#  BUSES
# ═══════════════════════════════════════════════════════════════════════════════

def is_bus_in_service(net: pp.pandapowerNet, bus: int) -> bool:
    """Return ``True`` if *bus* exists and is in service."""
    if bus not in net.bus.index:
        return False
    return _flag(net.bus, bus, "in_service", True)


def is_boundary_bus(net: pp.pandapowerNet, bus: int) -> bool:
    """Return ``True`` if *bus* is an X-node."""
    if bus not in net.bus.index:
        return False
    return _flag(net.bus, bus, BOUNDARY_COLUMN, False)


def get_boundary_buses(net: pp.pandapowerNet) -> Set[int]:
    """Return the indices of all X-nodes."""
    if BOUNDARY_COLUMN not in net.bus.columns:
        return set()
    flags = net.bus[BOUNDARY_COLUMN]
    mask = flags.notna() & flags.astype(bool)
    return {int(b) for b in net.bus.index[mask]}


def get_network_buses(net: pp.pandapowerNet) -> List[int]:
    """Return all in-service buses that are not X-nodes, sorted."""
    xnodes = get_boundary_buses(net)
    return sorted(
        int(b) for b in net.bus.index
        if int(b) not in xnodes and is_bus_in_service(net, int(b))
    )


def get_bus_country(net: pp.pandapowerNet, bus: int) -> Optional[str]:
    """Return the country tag of *bus*, or ``None``."""
    if COUNTRY_COLUMN not in net.bus.columns:
        return None
    value = net.bus.at[bus, COUNTRY_COLUMN]
    if pd.isna(value):
        return None
    return str(value)


def get_bus_voltage_level(net: pp.pandapowerNet, bus: int) -> Hashable:
    """Return the voltage-level id of *bus* (the bus index when untagged)."""
    if VOLTAGE_LEVEL_COLUMN in net.bus.columns:
        value = net.bus.at[bus, VOLTAGE_LEVEL_COLUMN]
        if not pd.isna(value):
            return value
    return int(bus)


def get_voltage_levels(net: pp.pandapowerNet) -> Set[Hashable]:
    """Return the ids of every voltage level present in the network."""
    return {get_bus_voltage_level(net, int(b)) for b in net.bus.index}


# ═══════════════════════════════════════════════════════════════════════════════
#  TERMINALS
# ═══════════════════════════════════════════════════════════════════════════════

def get_terminal_bus(net: pp.pandapowerNet, terminal: Terminal) -> int:
    """Return the bus a terminal is attached to, regardless of its state.

    Raises
    ------
    KeyError
        If the terminal points at a missing element row.
    """
    column = SIDE_BUS_COLUMNS[terminal.element][terminal.side]
    table = _table(net, terminal.element)
    if terminal.index not in table.index:
        raise KeyError(
            f"{terminal.element} {terminal.index} does not exist in the network."
        )
    return int(table.at[terminal.index, column])


def is_connected(net: pp.pandapowerNet, terminal: Terminal) -> bool:
    """Return ``True`` if *terminal* connects its equipment to an energised bus."""
    table = _table(net, terminal.element)
    if terminal.index not in table.index:
        return False
    if not _flag(table, terminal.index, "in_service", True):
        return False
    bus = get_terminal_bus(net, terminal)
    if not is_bus_in_service(net, bus):
        return False

    et = SWITCH_ELEMENT_TYPES.get(terminal.element)
    switches = _table(net, "switch")
    if et is None or switches.empty:
        return True
    open_switch = (
        (switches["et"] == et)
        & (switches["element"] == terminal.index)
        & (switches["bus"] == bus)
        & ~switches["closed"].astype(bool)
    )
    return not bool(open_switch.any())


def get_terminal_node(net: pp.pandapowerNet, terminal: Terminal) -> Optional[int]:
    """Return the bus of a connected terminal, ``None`` when disconnected."""
    if not is_connected(net, terminal):
        return None
    return get_terminal_bus(net, terminal)


def get_terminal_p(net: pp.pandapowerNet, terminal: Terminal) -> float:
    """Active power at *terminal* in MW (load convention, NaN if unknown)."""
    column = SIDE_P_COLUMNS[terminal.element][terminal.side]
    res = _table(net, f"res_{terminal.element}")
    if column not in res.columns or terminal.index not in res.index:
        return float("nan")
    p = float(res.at[terminal.index, column])
    if terminal.element in GENERATOR_CONVENTION_ELEMENTS:
        return -p
    return p


def get_terminal_flow(net: pp.pandapowerNet, terminal: Terminal) -> float:
    """Active power of a connected terminal; 0 when disconnected or NaN."""
    if not is_connected(net, terminal):
        return 0.0
    p = get_terminal_p(net, terminal)
    return p if np.isfinite(p) else 0.0


# ═══════════════════════════════════════════════════════════════════════════════
#  BOUNDARIES
# ═══════════════════════════════════════════════════════════════════════════════

def get_boundary_p(net: pp.pandapowerNet, boundary: Boundary) -> float:
    """Active power at the X-node end, measured looking into the area."""
    return get_terminal_p(net, boundary.terminal)


def get_boundary_node(net: pp.pandapowerNet, boundary: Boundary) -> Optional[int]:
    """Network-side bus of the half-branch, ``None`` when disconnected."""
    return get_terminal_node(net, boundary.network_terminal)


# ═══════════════════════════════════════════════════════════════════════════════
#  ELEMENT ENUMERATION
# ═══════════════════════════════════════════════════════════════════════════════

def _two_sided(element: str) -> List[str]:
    return list(SIDE_BUS_COLUMNS[element])


def get_half_branches_by_xnode(net: pp.pandapowerNet) -> Dict[int, List[DanglingLine]]:
    """Group every half-branch by the X-node it ends at.

    Returns
    -------
    dict[int, list[DanglingLine]]
        X-node bus → half-branches in (element, index) order.
    """
    xnodes = get_boundary_buses(net)
    halves: Dict[int, List[DanglingLine]] = defaultdict(list)
    if not xnodes:
        return {}
    for element in HALF_BRANCH_ELEMENTS:
        table = _table(net, element)
        if table.empty:
            continue
        for idx, f_bus, t_bus in zip(table.index, table["from_bus"], table["to_bus"]):
            for side, bus in (("from", int(f_bus)), ("to", int(t_bus))):
                if bus not in xnodes:
                    continue
                halves[bus].append(DanglingLine(
                    terminal=Terminal(element, int(idx), OPPOSITE_SIDE[side]),
                    boundary=Boundary(element, int(idx), side),
                    xnode=bus,
                ))
    return dict(halves)


def get_dangling_lines(net: pp.pandapowerNet) -> List[DanglingLine]:
    """Return half-branches that are not paired into a tie line."""
    dangling: List[DanglingLine] = []
    for xnode, halves in sorted(get_half_branches_by_xnode(net).items()):
        if len(halves) == 2:
            continue
        if len(halves) > 2:
            logger.warning(
                "X-node %d carries %d half-branches; treating each as a "
                "dangling line.", xnode, len(halves),
            )
        dangling.extend(halves)
    return dangling


def get_tie_lines(net: pp.pandapowerNet) -> List[TieLine]:
    """Return pairs of half-branches meeting at the same X-node."""
    return [
        TieLine(half1=halves[0], half2=halves[1])
        for _, halves in sorted(get_half_branches_by_xnode(net).items())
        if len(halves) == 2
    ]


def get_branches(net: pp.pandapowerNet) -> List[Branch]:
    """Return lines, impedances and 2W transformers.

    Lines and impedances ending at an X-node are half-branches and are left
    out; a 2W transformer is a branch wherever it ends.
    """
    xnodes = get_boundary_buses(net)
    branches: List[Branch] = []
    for element in ("line", "impedance", "trafo"):
        table = _table(net, element)
        if table.empty:
            continue
        side1, side2 = _two_sided(element)
        col1 = SIDE_BUS_COLUMNS[element][side1]
        col2 = SIDE_BUS_COLUMNS[element][side2]
        for idx, bus1, bus2 in zip(table.index, table[col1], table[col2]):
            if element in HALF_BRANCH_ELEMENTS and (int(bus1) in xnodes or int(bus2) in xnodes):
                continue
            branches.append(Branch(
                element=element,
                index=int(idx),
                terminal1=Terminal(element, int(idx), side1),
                terminal2=Terminal(element, int(idx), side2),
            ))
    return branches


def get_three_windings_transformers(net: pp.pandapowerNet) -> List[ThreeWindingsTransformer]:
    """Return every 3-winding transformer with its three leg terminals."""
    table = _table(net, "trafo3w")
    return [
        ThreeWindingsTransformer(
            index=int(idx),
            terminals=tuple(Terminal("trafo3w", int(idx), side) for side in ("hv", "mv", "lv")),
        )
        for idx in table.index
    ]


def get_hvdc_lines(net: pp.pandapowerNet) -> List[HvdcLine]:
    """Return every DC link of ``net.dcline``."""
    table = _table(net, "dcline")
    return [
        HvdcLine(
            index=int(idx),
            terminal1=Terminal("dcline", int(idx), "from"),
            terminal2=Terminal("dcline", int(idx), "to"),
        )
        for idx in table.index
    ]


def get_loads_at_buses(net: pp.pandapowerNet, buses: Iterable[int]) -> List[int]:
    """Return the indices of loads attached to any of *buses*, sorted."""
    wanted = set(buses)
    loads = _table(net, "load")
    if loads.empty:
        return []
    return sorted(int(i) for i, b in zip(loads.index, loads["bus"]) if int(b) in wanted)
