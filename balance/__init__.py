"""
Balance Module
==============

Value objects consumed by the balance-adjustment driver.

Classes
-------
BalanceComputationParameters
    Threshold, iteration limit and load-flow options.
BalanceComputationArea
    Area definition, scalable and target net position.

Functions
---------
read_parameters, write_parameters
    JSON persistence of BalanceComputationParameters.
"""

from balance.parameters import (
    BalanceComputationParameters,
    read_parameters,
    write_parameters,
)
from balance.balance_area import BalanceComputationArea

__all__ = [
    "BalanceComputationParameters",
    "read_parameters",
    "write_parameters",
    "BalanceComputationArea",
]
