"""
Balance Computation Parameters Module
=====================================

This module defines the tuning parameters of the balance-adjustment driver
and their JSON persistence.

JSON layout::

    {
      "version": "1.0",
      "threshold_net_position": 1.0,
      "max_number_iterations": 5,
      "load_flow_parameters": {"algorithm": "nr", "max_iteration": 10}
    }

All keys except ``version`` are optional and fall back to the defaults.
Unknown keys are rejected so that a typo never goes unnoticed.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

VERSION = "1.0"
DEFAULT_THRESHOLD_NET_POSITION = 1.0
DEFAULT_MAX_NUMBER_ITERATIONS = 5

_FIELDS = ("threshold_net_position", "max_number_iterations", "load_flow_parameters")


@dataclass(frozen=True)
class BalanceComputationParameters:
    """
    Parameters of the balance-adjustment driver.

    Attributes
    ----------
    threshold_net_position : float
        Net-position mismatch in MW under which an area counts as balanced.
        Must be positive.
    max_number_iterations : int
        Maximum number of load-flow / scaling iterations. Must be >= 1.
    load_flow_parameters : dict
        Keyword arguments passed to ``pandapower.runpp``.
    """
    threshold_net_position: float = DEFAULT_THRESHOLD_NET_POSITION
    max_number_iterations: int = DEFAULT_MAX_NUMBER_ITERATIONS
    load_flow_parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate parameters after initialisation."""
        if not self.threshold_net_position > 0:
            raise ValueError(
                f"threshold_net_position must be positive, got {self.threshold_net_position}"
            )
        if isinstance(self.max_number_iterations, bool) or \
                int(self.max_number_iterations) != self.max_number_iterations:
            raise ValueError(
                f"max_number_iterations must be an integer, got {self.max_number_iterations}"
            )
        if self.max_number_iterations < 1:
            raise ValueError(
                f"max_number_iterations must be >= 1, got {self.max_number_iterations}"
            )
        if not isinstance(self.load_flow_parameters, dict):
            raise ValueError("load_flow_parameters must be a dict of runpp keyword arguments")
        object.__setattr__(self, "threshold_net_position", float(self.threshold_net_position))
        object.__setattr__(self, "max_number_iterations", int(self.max_number_iterations))
        object.__setattr__(self, "load_flow_parameters", dict(self.load_flow_parameters))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": VERSION,
            "threshold_net_position": self.threshold_net_position,
            "max_number_iterations": self.max_number_iterations,
            "load_flow_parameters": dict(self.load_flow_parameters),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalanceComputationParameters":
        """
        Build parameters from a decoded JSON object.

        Raises
        ------
        ValueError
            If the version is missing or unsupported, or a key is unknown.
        """
        data = dict(data)
        version = data.pop("version", None)
        if version != VERSION:
            raise ValueError(f"Unsupported parameters version: {version!r}")
        unknown = sorted(set(data) - set(_FIELDS))
        if unknown:
            raise ValueError(f"Unknown balance computation parameters: {unknown}")
        return cls(**data)


def read_parameters(path: Union[str, Path]) -> BalanceComputationParameters:
    """Read BalanceComputationParameters from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return BalanceComputationParameters.from_dict(json.load(f))


def write_parameters(parameters: BalanceComputationParameters, path: Union[str, Path]) -> None:
    """Write BalanceComputationParameters to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(parameters.to_dict(), f, indent=2)
