#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Connectivity Analyzer
=====================

Connected-component queries over a graph produced by
:func:`topology.graph_builder.build_topology_graph`.

Seed vertices that are absent from the graph (``None``, or buses that are
out of service) are skipped rather than rejected; the owning area reports
the resulting zero/several-component situation itself.

Public API
----------
``ConnectivityAnalyzer(graph)``
    ``connected_set(seed)``, ``all_connected_sets()``,
    ``components_of(seeds)``, ``is_single_component(seeds)``

``synchronous_component_numbers(net)``
    → ``dict[int, int]`` (bus → synchronous component number)
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, Iterable, List, Optional, Set

import networkx as nx
import pandapower as pp

from topology.graph_builder import build_topology_graph, is_bus_vertex


def _component_sort_key(component: Set[Hashable]):
    buses = [n for n in component if is_bus_vertex(n)]
    return (-len(component), min(buses) if buses else float("inf"))


class ConnectivityAnalyzer:
    """
    Reachability and partition queries on one topology graph.

    The partition is computed once per analyzer and reused by all queries.
    Components are ordered by decreasing size, ties broken by smallest bus.
    """

    def __init__(self, graph: nx.MultiGraph) -> None:
        self.graph = graph
        self._components: Optional[List[FrozenSet[Hashable]]] = None
        self._component_of: Dict[Hashable, int] = {}

    def connected_set(self, seed: Hashable) -> FrozenSet[Hashable]:
        """Return every vertex reachable from *seed* (empty if *seed* is absent)."""
        if seed is None or not self.graph.has_node(seed):
            return frozenset()
        return frozenset(nx.node_connected_component(self.graph, seed))

    def all_connected_sets(self) -> List[FrozenSet[Hashable]]:
        """Return the partition of the whole graph into connected components."""
        if self._components is None:
            components = sorted(
                (set(c) for c in nx.connected_components(self.graph)),
                key=_component_sort_key,
            )
            self._components = [frozenset(c) for c in components]
            self._component_of = {
                node: num
                for num, component in enumerate(self._components)
                for node in component
            }
        return self._components

    def component_number(self, node: Hashable) -> Optional[int]:
        """Return the component number of *node*, ``None`` if absent."""
        self.all_connected_sets()
        return self._component_of.get(node)

    def components_of(self, seeds: Iterable[Hashable]) -> Set[int]:
        """Return the numbers of all components touched by *seeds*."""
        numbers = (self.component_number(seed) for seed in seeds if seed is not None)
        return {num for num in numbers if num is not None}

    def is_single_component(self, seeds: Iterable[Hashable]) -> bool:
        """``True`` iff all present seeds fall into exactly one component."""
        return len(self.components_of(seeds)) == 1


def synchronous_component_numbers(net: pp.pandapowerNet) -> Dict[int, int]:
    """Number the AC islands of *net*.

    HVDC links do not join the islands they connect. Numbers start at 0 for
    the largest island.

    Returns
    -------
    dict[int, int]
        In-service bus → synchronous component number.
    """
    analyzer = ConnectivityAnalyzer(build_topology_graph(net, include_hvdc=False))
    return {
        node: num
        for num, component in enumerate(analyzer.all_connected_sets())
        for node in component
        if is_bus_vertex(node)
    }
