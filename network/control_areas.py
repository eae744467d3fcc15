#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Control-Area Mapping — Tie Flows Stored Inside the Net
======================================================

A control area is known to the network model by name only.  Its tie flows
(terminals and boundaries) are stored in a pandapower-style element table
``net["control_area"]`` with one row per tie flow:

======== ==================================================
name     control-area name (str)
kind     ``"terminal"`` or ``"boundary"``
element  pandapower table of the tie-flow equipment
element_index  row index in that table
side     terminal / boundary side
======== ==================================================

Public API
----------
``create_control_area(net, name, terminals, boundaries)``
    → ``list[int]`` (row indices, pandapower ``create_*`` idiom)

``get_control_area(net, name)``
    → ``(frozenset[Terminal], frozenset[Boundary])``

``get_control_area_names(net)``
    → ``list[str]``
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple

import pandas as pd
import pandapower as pp

from network.elements import Boundary, Terminal

CONTROL_AREA_TABLE = "control_area"
_COLUMNS = ["name", "kind", "element", "element_index", "side"]


def _control_area_table(net: pp.pandapowerNet) -> pd.DataFrame:
    table = net.get(CONTROL_AREA_TABLE)
    if not isinstance(table, pd.DataFrame):
        return pd.DataFrame(columns=_COLUMNS)
    return table


def create_control_area(
    net: pp.pandapowerNet,
    name: str,
    terminals: Iterable[Terminal] = (),
    boundaries: Iterable[Boundary] = (),
) -> List[int]:
    """Register the tie flows of control area *name* in the net.

    Parameters
    ----------
    net : pp.pandapowerNet
        Network to extend in place (only the ``control_area`` table changes).
    name : str
        Control-area name, e.g. ``"10YBE----------2"``.
    terminals : iterable of Terminal
        Tie-flow terminals on the area side.
    boundaries : iterable of Boundary
        Tie-flow boundaries (X-node ends of half-branches).

    Returns
    -------
    list[int]
        Row indices of the created entries.

    Raises
    ------
    TypeError
        If an item is not of the expected type.
    """
    rows = []
    for terminal in terminals:
        if not isinstance(terminal, Terminal):
            raise TypeError(f"Expected a Terminal, got {type(terminal).__name__}.")
        rows.append((name, "terminal", terminal.element, terminal.index, terminal.side))
    for boundary in boundaries:
        if not isinstance(boundary, Boundary):
            raise TypeError(f"Expected a Boundary, got {type(boundary).__name__}.")
        rows.append((name, "boundary", boundary.element, boundary.index, boundary.side))

    table = _control_area_table(net)
    start = int(table.index.max()) + 1 if len(table) else 0
    new_index = list(range(start, start + len(rows)))
    if rows:
        new_rows = pd.DataFrame(rows, columns=_COLUMNS, index=new_index)
        table = new_rows if table.empty else pd.concat([table, new_rows])
    net[CONTROL_AREA_TABLE] = table
    return new_index


def get_control_area(
    net: pp.pandapowerNet,
    name: str,
) -> Tuple[FrozenSet[Terminal], FrozenSet[Boundary]]:
    """Resolve control area *name* into its terminals and boundaries.

    An unknown name resolves to two empty sets; the caller decides whether
    that is an error.
    """
    table = _control_area_table(net)
    if table.empty:
        return frozenset(), frozenset()
    rows = table[table["name"] == name]
    terminals = frozenset(
        Terminal(r.element, int(r.element_index), r.side)
        for r in rows[rows["kind"] == "terminal"].itertuples()
    )
    boundaries = frozenset(
        Boundary(r.element, int(r.element_index), r.side)
        for r in rows[rows["kind"] == "boundary"].itertuples()
    )
    return terminals, boundaries


def get_control_area_names(net: pp.pandapowerNet) -> List[str]:
    """Return the registered control-area names in order of first appearance."""
    table = _control_area_table(net)
    return list(dict.fromkeys(table["name"].tolist()))
