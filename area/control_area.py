"""
Control Area Module
===================

This module defines the ControlArea, a network area whose border is given
explicitly as a set of tie-flow terminals and boundaries.

Net position:
    NP = Σ_terminals (connected ? P : 0) − Σ_boundaries P_boundary

Terminal flows are measured from the area bus into the equipment, boundary
flows from the X-node into the area, hence the opposite signs.

Contained buses are found by cutting the tie flows out of the bus graph and
collecting the component that holds the tie-flow buses. That component must
be unique: a border spanning several islands (or none) raises
MalformedAreaError at construction time.
"""

from itertools import chain
from typing import FrozenSet, Iterable, Optional

import numpy as np
import pandapower as pp

from area.network_area import NetworkArea
from core.exceptions import MalformedAreaError, UndefinedBoundaryError
from core.logging import get_logger
from network.control_areas import get_control_area
from network.elements import Boundary, Terminal
from network.network_model import (
    get_boundary_node,
    get_boundary_p,
    get_terminal_flow,
    get_terminal_node,
    is_boundary_bus,
)
from topology.connectivity import ConnectivityAnalyzer
from topology.graph_builder import build_topology_graph, is_bus_vertex

logger = get_logger(__name__)


class ControlArea(NetworkArea):
    """
    Network area delimited by explicit tie flows.

    Attributes
    ----------
    net : pp.pandapowerNet
        Network the area is bound to.
    terminals : FrozenSet[Terminal]
        Tie-flow terminals, located on the area side.
    boundaries : FrozenSet[Boundary]
        Tie-flow boundaries (X-node ends of half-branches).
    """

    def __init__(
        self,
        net: pp.pandapowerNet,
        terminals: Optional[Iterable[Terminal]] = None,
        boundaries: Optional[Iterable[Boundary]] = None,
    ) -> None:
        """
        Initialise a ControlArea and validate its topology.

        Parameters
        ----------
        net : pp.pandapowerNet
            Solved network snapshot.
        terminals : iterable of Terminal, optional
            Tie-flow terminals.
        boundaries : iterable of Boundary, optional
            Tie-flow boundaries.

        Raises
        ------
        UndefinedBoundaryError
            If both sets are empty.
        MalformedAreaError
            If the tie flows do not enclose exactly one component.
        TypeError
            If a tie flow is of the wrong type.
        """
        super().__init__(net)
        self.terminals: FrozenSet[Terminal] = frozenset(terminals or ())
        self.boundaries: FrozenSet[Boundary] = frozenset(boundaries or ())
        for terminal in self.terminals:
            if not isinstance(terminal, Terminal):
                raise TypeError(f"Expected a Terminal, got {type(terminal).__name__}.")
        for boundary in self.boundaries:
            if not isinstance(boundary, Boundary):
                raise TypeError(f"Expected a Boundary, got {type(boundary).__name__}.")
        if not self.terminals and not self.boundaries:
            raise UndefinedBoundaryError("Undefined tie flows for control area.")

        self._contained_buses: Optional[FrozenSet[int]] = None
        self.contained_nodes()

    @classmethod
    def from_name(cls, net: pp.pandapowerNet, name: str) -> "ControlArea":
        """
        Build a ControlArea from the control-area mapping stored in the net.

        Raises
        ------
        UndefinedBoundaryError
            If *name* resolves to no terminal and no boundary.
        """
        terminals, boundaries = get_control_area(net, name)
        if not terminals and not boundaries:
            raise UndefinedBoundaryError(
                f"Control area '{name}' has no tie flow in the network."
            )
        return cls(net, terminals, boundaries)

    def net_position(self) -> float:
        flows = np.fromiter(
            chain(
                (get_terminal_flow(self.net, t) for t in sorted(self.terminals)),
                (-get_boundary_p(self.net, b) for b in sorted(self.boundaries)),
            ),
            dtype=np.float64,
        )
        return float(np.nansum(flows))

    def contained_nodes(self) -> FrozenSet[int]:
        if self._contained_buses is None:
            self._contained_buses = self._compute_contained_buses()
        return self._contained_buses

    def contained_buses(self) -> FrozenSet[int]:
        return self.contained_nodes()

    def reset_cache(self) -> None:
        self._contained_buses = None

    def _compute_contained_buses(self) -> FrozenSet[int]:
        graph = build_topology_graph(self.net, self.terminals, self.boundaries)
        analyzer = ConnectivityAnalyzer(graph)

        seeds = [get_terminal_node(self.net, t) for t in sorted(self.terminals)]
        seeds += [get_boundary_node(self.net, b) for b in sorted(self.boundaries)]
        seeds = [s for s in seeds if s is not None and graph.has_node(s)]

        n_components = len(analyzer.components_of(seeds))
        if n_components != 1:
            raise MalformedAreaError(
                f"Control area tie flows touch {n_components} components, "
                f"expected exactly one."
            )

        buses = frozenset(
            node for node in analyzer.connected_set(seeds[0])
            if is_bus_vertex(node) and not is_boundary_bus(self.net, node)
        )
        if not buses:
            raise MalformedAreaError("Control area contains no bus.")
        logger.debug(
            "Control area with %d terminals and %d boundaries contains %d buses.",
            len(self.terminals), len(self.boundaries), len(buses),
        )
        return buses
