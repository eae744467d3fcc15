"""
Network Module
==============

Read-only view of a pandapower net as used by the area computations, the
control-area mapping stored inside the net, and the benchmark network.

Classes
-------
Terminal, Boundary
    Handles on element ends.
Branch, ThreeWindingsTransformer, HvdcLine, DanglingLine, TieLine
    Edge elements enumerated from the net.
BenchmarkMetadata
    Element indices of the two-country benchmark network.

Functions
---------
create_control_area, get_control_area, get_control_area_names
    Control-area mapping in ``net["control_area"]``.
build_benchmark_net
    Build the converged two-country 380/110/20 kV benchmark network.
"""

from network.elements import (
    Terminal,
    Boundary,
    Branch,
    ThreeWindingsTransformer,
    HvdcLine,
    DanglingLine,
    TieLine,
)
from network.control_areas import (
    create_control_area,
    get_control_area,
    get_control_area_names,
)
from network.build_benchmark_net import build_benchmark_net, BenchmarkMetadata

__all__ = [
    "Terminal",
    "Boundary",
    "Branch",
    "ThreeWindingsTransformer",
    "HvdcLine",
    "DanglingLine",
    "TieLine",
    "create_control_area",
    "get_control_area",
    "get_control_area_names",
    "build_benchmark_net",
    "BenchmarkMetadata",
]
