"""
Topology Module
===============

Graph materialisation and connectivity analysis over a pandapower net.

Functions
---------
build_topology_graph
    Bus multigraph with a boundary cut out.
synchronous_component_numbers
    Bus → AC island number.

Classes
-------
ConnectivityAnalyzer
    Component queries on one graph.
"""

from topology.graph_builder import build_topology_graph, is_bus_vertex, trafo3w_center
from topology.connectivity import ConnectivityAnalyzer, synchronous_component_numbers

__all__ = [
    "build_topology_graph",
    "is_bus_vertex",
    "trafo3w_center",
    "ConnectivityAnalyzer",
    "synchronous_component_numbers",
]
