"""
Scalable Module
===============

This module defines the scalables used by the balance-adjustment driver to
shift the net position of an area toward its target.

A scalable changes the active power of loads in ``net.load.p_mw``. The
amount asked follows the generator convention:

    asked > 0  →  more injection, i.e. the load decreases
    asked < 0  →  less injection, i.e. the load increases

A load is never scaled below 0 MW. scale() returns the amount actually done,
which may be smaller than the amount asked.

Classes
-------
Scalable
    Abstract base with scale(net, asked_mw).
LoadScalable
    One load.
ProportionalScalable
    Several loads sharing the asked amount by fixed percentages.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
import pandas as pd
import pandapower as pp

from core.logging import get_logger

logger = get_logger(__name__)


class Scalable(ABC):
    """Controllable injection that can be scaled by an active-power amount."""

    @abstractmethod
    def scale(self, net: pp.pandapowerNet, asked_mw: float) -> float:
        """
        Apply *asked_mw* to the network.

        Parameters
        ----------
        net : pp.pandapowerNet
            Network to modify in place.
        asked_mw : float
            Injection change in MW (generator convention).

        Returns
        -------
        float
            Injection change actually applied, in MW.
        """


class LoadScalable(Scalable):
    """
    Scalable acting on one row of ``net.load``.

    Attributes
    ----------
    load_index : int
        Row index in ``net.load``.
    """

    def __init__(self, load_index: int) -> None:
        self.load_index = int(load_index)

    def scale(self, net: pp.pandapowerNet, asked_mw: float) -> float:
        if self.load_index not in net.load.index:
            raise KeyError(f"load {self.load_index} does not exist in the network.")
        if not bool(net.load.at[self.load_index, "in_service"]):
            logger.warning("load %d is out of service and cannot be scaled.", self.load_index)
            return 0.0

        p_mw = float(net.load.at[self.load_index, "p_mw"])
        # Load cannot turn into a generator.
        done = min(asked_mw, p_mw) if asked_mw > 0 else asked_mw
        net.load.at[self.load_index, "p_mw"] = p_mw - done
        return float(done)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LoadScalable) and other.load_index == self.load_index

    def __hash__(self) -> int:
        return hash(("load", self.load_index))

    def __repr__(self) -> str:
        return f"LoadScalable(load_index={self.load_index})"


class ProportionalScalable(Scalable):
    """
    Loads sharing an asked amount by fixed percentages.

    Attributes
    ----------
    percentages : pd.Series
        Percentage per load index, summing to 100.
    """

    def __init__(self, load_indices: Sequence[int], percentages: Sequence[float]) -> None:
        if len(load_indices) != len(percentages):
            raise ValueError(
                f"{len(load_indices)} loads but {len(percentages)} percentages given."
            )
        if len(load_indices) == 0:
            raise ValueError("ProportionalScalable requires at least one load.")
        if len(set(load_indices)) != len(load_indices):
            raise ValueError("Duplicate load indices.")
        values = np.asarray(percentages, dtype=np.float64)
        if np.any(values < 0):
            raise ValueError("Percentages must be non-negative.")
        if not np.isclose(values.sum(), 100.0):
            raise ValueError(f"Percentages must sum to 100, got {values.sum()}.")

        self.percentages = pd.Series(
            values, index=pd.Index([int(i) for i in load_indices], name="load"),
            name="percentage",
        )
        self._scalables = [LoadScalable(i) for i in self.percentages.index]

    @property
    def load_indices(self):
        return list(self.percentages.index)

    def distribute(self, asked_mw: float) -> pd.Series:
        """Return the share of *asked_mw* assigned to each load (pure)."""
        return (self.percentages * asked_mw / 100.0).rename("asked_mw")

    def scale(self, net: pp.pandapowerNet, asked_mw: float) -> float:
        shares = self.distribute(asked_mw)
        done = sum(s.scale(net, shares[s.load_index]) for s in self._scalables)
        logger.debug("Scaled %d loads: asked %.3f MW, done %.3f MW.",
                     len(self._scalables), asked_mw, done)
        return float(done)

    def __repr__(self) -> str:
        return f"ProportionalScalable(loads={self.load_indices})"
