"""
Area Utilities Module
=====================

This module provides helpers around network areas:

- synchronous-component checks and splitting of a control area whose tie
  flows span several AC islands;
- construction of load scalables from the buses contained in an area.

Splitting is the remediation path for a control area that would otherwise
raise MalformedAreaError: each returned definition holds the tie flows of
one synchronous component only.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set

import pandapower as pp

from area.definitions import ControlAreaDefinition
from area.network_area import NetworkArea
from area.scalable import LoadScalable, ProportionalScalable
from core.logging import get_logger
from network.control_areas import get_control_area
from network.elements import Boundary, Terminal
from network.network_model import (
    get_boundary_node,
    get_loads_at_buses,
    get_terminal_node,
    is_connected,
)
from topology.connectivity import synchronous_component_numbers

logger = get_logger(__name__)


def _component_of(
    components: Dict[int, int],
    bus: Optional[int],
) -> Optional[int]:
    if bus is None:
        return None
    return components.get(bus)


def contains_several_synchronous_components(net: pp.pandapowerNet, area_id: str) -> bool:
    """
    Check whether the tie flows of control area *area_id* span several islands.

    A tie flow without a bus (disconnected) counts as a separate island,
    since its component cannot be determined.

    Parameters
    ----------
    net : pp.pandapowerNet
        Network snapshot.
    area_id : str
        Control-area name in net["control_area"].

    Returns
    -------
    bool
        True if more than one synchronous component is touched.
    """
    terminals, boundaries = get_control_area(net, area_id)
    components = synchronous_component_numbers(net)

    buses = [get_terminal_node(net, t) for t in sorted(terminals)]
    buses += [get_boundary_node(net, b) for b in sorted(boundaries)]

    seen: Set[int] = set()
    for bus in buses:
        number = _component_of(components, bus)
        if number is None:
            return True
        seen.add(number)
    return len(seen) > 1


def split_by_synchronous_component(
    net: pp.pandapowerNet,
    area_id: str,
) -> List[ControlAreaDefinition]:
    """
    Split control area *area_id* into one definition per synchronous component.

    Tie flows whose bus cannot be determined are dropped with a warning. The
    remaining tie flows are partitioned exactly between the returned
    definitions.

    Returns
    -------
    list[ControlAreaDefinition]
        One definition per component, ordered by component number.
    """
    terminals, boundaries = get_control_area(net, area_id)
    components = synchronous_component_numbers(net)

    terminals_by_cc: Dict[int, Set[Terminal]] = defaultdict(set)
    boundaries_by_cc: Dict[int, Set[Boundary]] = defaultdict(set)

    for terminal in sorted(terminals):
        number = _component_of(components, get_terminal_node(net, terminal))
        if number is None:
            logger.warning("Control area '%s': dropping %s, it has no bus.", area_id, terminal)
            continue
        terminals_by_cc[number].add(terminal)
    for boundary in sorted(boundaries):
        number = _component_of(components, get_boundary_node(net, boundary))
        if number is None:
            logger.warning("Control area '%s': dropping %s, it has no bus.", area_id, boundary)
            continue
        boundaries_by_cc[number].add(boundary)

    numbers = sorted(set(terminals_by_cc) | set(boundaries_by_cc))
    logger.info(
        "Control area '%s' split into %d synchronous components.", area_id, len(numbers)
    )
    return [
        ControlAreaDefinition(
            terminals=frozenset(terminals_by_cc.get(n, ())),
            boundaries=frozenset(boundaries_by_cc.get(n, ())),
        )
        for n in numbers
    ]


def _scalable_load_indices(net: pp.pandapowerNet, area: NetworkArea) -> List[int]:
    return [
        idx for idx in get_loads_at_buses(net, area.contained_buses())
        if is_connected(net, Terminal("load", idx))
        and float(net.load.at[idx, "p_mw"]) >= 0
    ]


def create_load_scalables(net: pp.pandapowerNet, area: NetworkArea) -> List[LoadScalable]:
    """
    Return one LoadScalable per scalable load of *area*.

    A load is scalable when it is connected to a contained bus and its
    active power is not negative. The list is ordered by load index.
    """
    return [LoadScalable(idx) for idx in _scalable_load_indices(net, area)]


def create_conform_load_scalable(
    net: pp.pandapowerNet,
    area: NetworkArea,
) -> ProportionalScalable:
    """
    Return a ProportionalScalable over the scalable loads of *area*.

    Each load is weighted by its current active power. If all of them are at
    0 MW the weights are equal.

    Raises
    ------
    ValueError
        If the area has no scalable load.
    """
    indices = _scalable_load_indices(net, area)
    if not indices:
        raise ValueError("The area contains no scalable load.")
    p_mw = net.load.loc[indices, "p_mw"].astype(float)
    total = float(p_mw.sum())
    if total > 0:
        percentages = (p_mw / total * 100.0).tolist()
    else:
        percentages = [100.0 / len(indices)] * len(indices)
    return ProportionalScalable(indices, percentages)
