"""
Portfolio - Configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PortfolioConfig:
    """
    Portfolio aggregation configuration.

    Read once when the aggregator is constructed.
    """

    fail_on_data_corruption: bool = False
    """
    Policy for instruments whose replayed holdings are negative.

    True: raise DataCorruptionError and abort the whole read.
    False: log a warning and omit that instrument's position.
    """
