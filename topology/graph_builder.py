#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Topology Graph Builder
======================

Builds an undirected ``networkx.MultiGraph`` over the buses of a pandapower
net, following the conventions of ``pandapower.topology.create_nxgraph``
(edge keys ``(element, index)``, open switches respected).

Vertices
--------
* every in-service bus (X-nodes included, as plain bus vertices);
* one synthetic centre vertex ``("trafo3w", index)`` per 3-winding
  transformer, so that excluding one leg only cuts that leg.

Edges
-----
* closed bus-bus switches;
* lines, impedances and 2W transformers whose two terminals are connected;
* one edge per 3-winding transformer leg (centre ↔ leg bus);
* HVDC links (``net.dcline``), unless ``include_hvdc=False``;
* one half-edge per half-branch (network bus ↔ X-node), so the two halves of
  a tie line can be cut independently.

An edge is left out when its defining terminal or boundary belongs to the
excluded sets.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Tuple

import networkx as nx
import pandapower as pp

from network.elements import Boundary, Terminal
from network.network_model import (
    get_branches,
    get_half_branches_by_xnode,
    get_hvdc_lines,
    get_terminal_bus,
    get_three_windings_transformers,
    is_bus_in_service,
    is_connected,
)


def trafo3w_center(index: int) -> Tuple[str, int]:
    """Return the synthetic centre vertex of 3-winding transformer *index*."""
    return ("trafo3w", int(index))


def is_bus_vertex(node: Hashable) -> bool:
    """Return ``True`` for vertices that are real pandapower buses."""
    return isinstance(node, int)


def _validate_exclusions(
    excluded_terminals: Iterable[Terminal],
    excluded_boundaries: Iterable[Boundary],
) -> Tuple[frozenset, frozenset]:
    terminals = frozenset(excluded_terminals)
    boundaries = frozenset(excluded_boundaries)
    for item in terminals:
        if not isinstance(item, Terminal):
            raise TypeError(f"Excluded terminal expected, got {type(item).__name__}.")
    for item in boundaries:
        if not isinstance(item, Boundary):
            raise TypeError(f"Excluded boundary expected, got {type(item).__name__}.")
    return terminals, boundaries


def _add_bus_bus_switches(graph: nx.MultiGraph, net: pp.pandapowerNet) -> None:
    switches = net.get("switch")
    if switches is None or switches.empty:
        return
    closed_bb = switches[(switches["et"] == "b") & switches["closed"].astype(bool)]
    for idx, bus, other in zip(closed_bb.index, closed_bb["bus"], closed_bb["element"]):
        bus, other = int(bus), int(other)
        if graph.has_node(bus) and graph.has_node(other):
            graph.add_edge(bus, other, key=("switch", int(idx)), element="switch", index=int(idx))


def build_topology_graph(
    net: pp.pandapowerNet,
    excluded_terminals: Iterable[Terminal] = (),
    excluded_boundaries: Iterable[Boundary] = (),
    *,
    include_hvdc: bool = True,
) -> nx.MultiGraph:
    """Materialise the bus graph of *net* with the given boundary cut out.

    Parameters
    ----------
    net : pp.pandapowerNet
        Network snapshot. It is only read.
    excluded_terminals : iterable of Terminal
        Terminals whose equipment edge (or transformer leg) is removed.
    excluded_boundaries : iterable of Boundary
        Boundaries whose half-edge is removed.
    include_hvdc : bool
        If ``False``, DC links do not connect their two AC sides. Used to
        compute synchronous components.

    Returns
    -------
    nx.MultiGraph
        Undirected multigraph; edges carry ``element`` and ``index`` data.

    Raises
    ------
    TypeError
        If an excluded item is neither a Terminal nor a Boundary.
    """
    terminals, boundaries = _validate_exclusions(excluded_terminals, excluded_boundaries)

    graph = nx.MultiGraph()
    graph.add_nodes_from(int(b) for b in net.bus.index if is_bus_in_service(net, int(b)))

    _add_bus_bus_switches(graph, net)

    for branch in get_branches(net):
        if branch.terminal1 in terminals or branch.terminal2 in terminals:
            continue
        if not (is_connected(net, branch.terminal1) and is_connected(net, branch.terminal2)):
            continue
        graph.add_edge(
            get_terminal_bus(net, branch.terminal1),
            get_terminal_bus(net, branch.terminal2),
            key=(branch.element, branch.index),
            element=branch.element, index=branch.index,
        )

    for trafo in get_three_windings_transformers(net):
        center = trafo3w_center(trafo.index)
        for leg in trafo.terminals:
            if leg in terminals or not is_connected(net, leg):
                continue
            graph.add_edge(
                center, get_terminal_bus(net, leg),
                key=("trafo3w", trafo.index, leg.side),
                element="trafo3w", index=trafo.index,
            )

    if include_hvdc:
        for hvdc in get_hvdc_lines(net):
            if hvdc.terminal1 in terminals or hvdc.terminal2 in terminals:
                continue
            if not (is_connected(net, hvdc.terminal1) and is_connected(net, hvdc.terminal2)):
                continue
            graph.add_edge(
                get_terminal_bus(net, hvdc.terminal1),
                get_terminal_bus(net, hvdc.terminal2),
                key=("dcline", hvdc.index),
                element="dcline", index=hvdc.index,
            )

    for xnode, halves in get_half_branches_by_xnode(net).items():
        for half in halves:
            if half.boundary in boundaries:
                continue
            if half.terminal in terminals or half.boundary.terminal in terminals:
                continue
            if not (is_connected(net, half.terminal) and is_connected(net, half.boundary.terminal)):
                continue
            graph.add_edge(
                get_terminal_bus(net, half.terminal), xnode,
                key=(half.boundary.element, half.boundary.index),
                element=half.boundary.element, index=half.boundary.index,
            )

    return graph
