#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Network Elements — Value Types over a pandapower Net
====================================================

Immutable, hashable handles that point at rows of a pandapower network.
They carry no electrical state themselves; all quantities are read on demand
through :mod:`network.network_model` so that a handle stays valid across
power-flow iterations.

Public API
----------
``Terminal``
    One electrical connection point (element table, row index, side).

``Boundary``
    The X-node end of a half-branch (dangling line or tie-line half).

``Branch``, ``ThreeWindingsTransformer``, ``HvdcLine``,
``DanglingLine``, ``TieLine``
    Edge elements enumerated by :mod:`network.network_model`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


# ═══════════════════════════════════════════════════════════════════════════════
#  SIDE CONVENTIONS
# ═══════════════════════════════════════════════════════════════════════════════

# Element table → {side: bus column}. An empty side denotes a single-bus
# injection.
SIDE_BUS_COLUMNS: Dict[str, Dict[str, str]] = {
    "line": {"from": "from_bus", "to": "to_bus"},
    "impedance": {"from": "from_bus", "to": "to_bus"},
    "dcline": {"from": "from_bus", "to": "to_bus"},
    "trafo": {"hv": "hv_bus", "lv": "lv_bus"},
    "trafo3w": {"hv": "hv_bus", "mv": "mv_bus", "lv": "lv_bus"},
    "load": {"": "bus"},
    "sgen": {"": "bus"},
    "gen": {"": "bus"},
    "ext_grid": {"": "bus"},
    "storage": {"": "bus"},
    "shunt": {"": "bus"},
    "ward": {"": "bus"},
    "xward": {"": "bus"},
}

# Element table → {side: active-power result column}.
SIDE_P_COLUMNS: Dict[str, Dict[str, str]] = {
    "line": {"from": "p_from_mw", "to": "p_to_mw"},
    "impedance": {"from": "p_from_mw", "to": "p_to_mw"},
    "dcline": {"from": "p_from_mw", "to": "p_to_mw"},
    "trafo": {"hv": "p_hv_mw", "lv": "p_lv_mw"},
    "trafo3w": {"hv": "p_hv_mw", "mv": "p_mv_mw", "lv": "p_lv_mw"},
    "load": {"": "p_mw"},
    "sgen": {"": "p_mw"},
    "gen": {"": "p_mw"},
    "ext_grid": {"": "p_mw"},
    "storage": {"": "p_mw"},
    "shunt": {"": "p_mw"},
    "ward": {"": "p_mw"},
    "xward": {"": "p_mw"},
}

# Result tables reported in generator convention (positive = injection).
GENERATOR_CONVENTION_ELEMENTS = frozenset({"sgen", "gen", "ext_grid"})

# Elements whose side can be switched by a bus-element switch (``et``).
SWITCH_ELEMENT_TYPES: Dict[str, str] = {
    "line": "l",
    "trafo": "t",
    "trafo3w": "t3",
}

# Two-terminal elements that may end at an X-node.
HALF_BRANCH_ELEMENTS = ("line", "impedance")

OPPOSITE_SIDE: Dict[str, str] = {"from": "to", "to": "from"}


# ═══════════════════════════════════════════════════════════════════════════════
#  TERMINAL AND BOUNDARY
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class Terminal:
    """Electrical connection point of an equipment.

    Attributes
    ----------
    element : str
        pandapower table name, e.g. ``"line"`` or ``"load"``.
    index : int
        Row index in ``net[element]``.
    side : str
        ``"from"``/``"to"``, ``"hv"``/``"lv"``, ``"hv"``/``"mv"``/``"lv"``
        or ``""`` for single-bus injections.
    """

    element: str
    index: int
    side: str = ""

    def __post_init__(self) -> None:
        sides = SIDE_BUS_COLUMNS.get(self.element)
        if sides is None:
            raise ValueError(f"Unsupported terminal element '{self.element}'.")
        if self.side not in sides:
            raise ValueError(
                f"Side '{self.side}' is not valid for element '{self.element}'; "
                f"expected one of {sorted(sides)}."
            )
        object.__setattr__(self, "index", int(self.index))


@dataclass(frozen=True, order=True)
class Boundary:
    """The X-node end of a half-branch (line or impedance).

    The active power read at this end follows the load convention, i.e. it is
    measured from the X-node into the half-branch, looking into the area.
    """

    element: str
    index: int
    side: str

    def __post_init__(self) -> None:
        if self.element not in HALF_BRANCH_ELEMENTS:
            raise ValueError(
                f"A boundary must sit on one of {HALF_BRANCH_ELEMENTS}, "
                f"got '{self.element}'."
            )
        if self.side not in OPPOSITE_SIDE:
            raise ValueError(f"Boundary side must be 'from' or 'to', got '{self.side}'.")
        object.__setattr__(self, "index", int(self.index))

    @property
    def terminal(self) -> Terminal:
        """Terminal located at the X-node."""
        return Terminal(self.element, self.index, self.side)

    @property
    def network_terminal(self) -> Terminal:
        """Terminal at the opposite (network) end of the half-branch."""
        return Terminal(self.element, self.index, OPPOSITE_SIDE[self.side])


# ═══════════════════════════════════════════════════════════════════════════════
#  EDGE ELEMENTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Branch:
    """Line, impedance or two-winding transformer between two network buses."""

    element: str
    index: int
    terminal1: Terminal
    terminal2: Terminal


@dataclass(frozen=True)
class ThreeWindingsTransformer:
    """Three-winding transformer, one terminal per leg (hv, mv, lv)."""

    index: int
    terminals: Tuple[Terminal, Terminal, Terminal]


@dataclass(frozen=True)
class HvdcLine:
    """DC link modelled as ``net.dcline``."""

    index: int
    terminal1: Terminal
    terminal2: Terminal


@dataclass(frozen=True)
class DanglingLine:
    """Half-branch between a network bus and an X-node.

    Attributes
    ----------
    terminal : Terminal
        Network-side terminal.
    boundary : Boundary
        X-node end of the same half-branch.
    xnode : int
        Bus index of the X-node.
    """

    terminal: Terminal
    boundary: Boundary
    xnode: int


@dataclass(frozen=True)
class TieLine:
    """Two half-branches meeting at one X-node."""

    half1: DanglingLine
    half2: DanglingLine

    @property
    def terminal1(self) -> Terminal:
        return self.half1.terminal

    @property
    def terminal2(self) -> Terminal:
        return self.half2.terminal

    @property
    def xnode(self) -> int:
        return self.half1.xnode
