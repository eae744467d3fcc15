"""
Inferred Border Area Module
===========================

This module defines the base class of the network areas whose border is not
given explicitly but inferred from a membership predicate over buses
(CountryArea, VoltageLevelsArea).

Border elements:
    Branch, tie line, HVDC line : exactly one end satisfies the predicate
    Three-winding transformer   : some, but not all, legs satisfy it
    (an element with an end of undetermined membership is never a border)
    Dangling line               : its network-side end satisfies it

Leaving flow of each border element (load convention at every terminal,
disconnected or NaN terminals contribute 0):
    two-ended      : ±(P_1 − P_2) / 2, sign + when side 1 is inside
    trafo3w        : (Σ P_inside − Σ P_outside) / 2
    dangling line  : P of the network-side terminal

Border discovery is cached per element family; the caches are dropped by
reset_cache() when the network connectivity changes.
"""

from abc import abstractmethod
from typing import FrozenSet, Hashable, List, Optional, Sequence

import numpy as np
import pandapower as pp

from area.network_area import NetworkArea
from core.logging import get_logger
from network.elements import (
    Branch,
    DanglingLine,
    HvdcLine,
    Terminal,
    ThreeWindingsTransformer,
    TieLine,
)
from network.network_model import (
    get_branches,
    get_bus_voltage_level,
    get_dangling_lines,
    get_hvdc_lines,
    get_network_buses,
    get_terminal_bus,
    get_terminal_flow,
    get_three_windings_transformers,
    get_tie_lines,
)

logger = get_logger(__name__)


class InferredBorderArea(NetworkArea):
    """
    Network area delimited by a predicate over buses.

    Subclasses implement _is_inside(bus). They may override _is_known(bus)
    to mark buses whose membership is undetermined; an element with an
    undetermined end or leg is never a border.
    """

    def __init__(self, net: pp.pandapowerNet) -> None:
        super().__init__(net)
        self._branch_borders: Optional[List[Branch]] = None
        self._tie_line_borders: Optional[List[TieLine]] = None
        self._trafo3w_borders: Optional[List[ThreeWindingsTransformer]] = None
        self._hvdc_borders: Optional[List[HvdcLine]] = None
        self._dangling_line_borders: Optional[List[DanglingLine]] = None
        self._contained_buses: Optional[FrozenSet[int]] = None
        self._contained_nodes: Optional[FrozenSet[Hashable]] = None

    @abstractmethod
    def _is_inside(self, bus: int) -> bool:
        """Return True if *bus* belongs to the area."""

    def _is_known(self, bus: int) -> bool:
        return True

    # ─── Predicates over terminals ────────────────────────────────────────

    def _terminal_inside(self, terminal: Terminal) -> bool:
        return self._is_inside(get_terminal_bus(self.net, terminal))

    def _crosses(self, terminal1: Terminal, terminal2: Terminal) -> bool:
        bus1 = get_terminal_bus(self.net, terminal1)
        bus2 = get_terminal_bus(self.net, terminal2)
        if not (self._is_known(bus1) and self._is_known(bus2)):
            return False
        return self._is_inside(bus1) != self._is_inside(bus2)

    def _is_trafo3w_border(self, trafo: ThreeWindingsTransformer) -> bool:
        buses = [get_terminal_bus(self.net, leg) for leg in trafo.terminals]
        if not all(self._is_known(bus) for bus in buses):
            return False
        inside = [self._terminal_inside(leg) for leg in trafo.terminals]
        return any(inside) and not all(inside)

    # ─── Border caches ────────────────────────────────────────────────────

    def branch_borders(self) -> List[Branch]:
        if self._branch_borders is None:
            self._branch_borders = [
                b for b in get_branches(self.net) if self._crosses(b.terminal1, b.terminal2)
            ]
        return self._branch_borders

    def tie_line_borders(self) -> List[TieLine]:
        if self._tie_line_borders is None:
            self._tie_line_borders = [
                t for t in get_tie_lines(self.net) if self._crosses(t.terminal1, t.terminal2)
            ]
        return self._tie_line_borders

    def three_windings_transformer_borders(self) -> List[ThreeWindingsTransformer]:
        if self._trafo3w_borders is None:
            self._trafo3w_borders = [
                t for t in get_three_windings_transformers(self.net)
                if self._is_trafo3w_border(t)
            ]
        return self._trafo3w_borders

    def hvdc_line_borders(self) -> List[HvdcLine]:
        if self._hvdc_borders is None:
            self._hvdc_borders = [
                h for h in get_hvdc_lines(self.net) if self._crosses(h.terminal1, h.terminal2)
            ]
        return self._hvdc_borders

    def dangling_line_borders(self) -> List[DanglingLine]:
        if self._dangling_line_borders is None:
            self._dangling_line_borders = [
                d for d in get_dangling_lines(self.net) if self._terminal_inside(d.terminal)
            ]
            logger.debug(
                "%s borders: %d branches, %d tie lines, %d trafo3w, %d hvdc, "
                "%d dangling lines.", type(self).__name__,
                len(self.branch_borders()), len(self.tie_line_borders()),
                len(self.three_windings_transformer_borders()),
                len(self.hvdc_line_borders()), len(self._dangling_line_borders),
            )
        return self._dangling_line_borders

    # ─── Leaving flows ────────────────────────────────────────────────────

    def _two_ended_leaving_flow(self, terminal1: Terminal, terminal2: Terminal) -> float:
        direct_flow = (
            get_terminal_flow(self.net, terminal1) - get_terminal_flow(self.net, terminal2)
        ) / 2
        return direct_flow if self._terminal_inside(terminal1) else -direct_flow

    def _trafo3w_leaving_flow(self, trafo: ThreeWindingsTransformer) -> float:
        inside_flow = 0.0
        outside_flow = 0.0
        for leg in trafo.terminals:
            if self._terminal_inside(leg):
                inside_flow += get_terminal_flow(self.net, leg)
            else:
                outside_flow += get_terminal_flow(self.net, leg)
        return (inside_flow - outside_flow) / 2

    def net_position(self) -> float:
        two_ended: Sequence = (
            self.branch_borders() + self.tie_line_borders() + self.hvdc_line_borders()
        )
        flows = [self._two_ended_leaving_flow(e.terminal1, e.terminal2) for e in two_ended]
        flows += [self._trafo3w_leaving_flow(t) for t in self.three_windings_transformer_borders()]
        flows += [get_terminal_flow(self.net, d.terminal) for d in self.dangling_line_borders()]
        return float(np.sum(flows)) if flows else 0.0

    # ─── Contained topology ───────────────────────────────────────────────

    def contained_buses(self) -> FrozenSet[int]:
        if self._contained_buses is None:
            self._contained_buses = frozenset(
                bus for bus in get_network_buses(self.net) if self._is_inside(bus)
            )
        return self._contained_buses

    def contained_nodes(self) -> FrozenSet[Hashable]:
        if self._contained_nodes is None:
            self._contained_nodes = frozenset(
                get_bus_voltage_level(self.net, bus) for bus in self.contained_buses()
            )
        return self._contained_nodes

    def reset_cache(self) -> None:
        self._branch_borders = None
        self._tie_line_borders = None
        self._trafo3w_borders = None
        self._hvdc_borders = None
        self._dangling_line_borders = None
        self._contained_buses = None
        self._contained_nodes = None
