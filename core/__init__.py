"""
Core Module Package.

This package contains the core infrastructure components
that all other modules depend on.

Components:
- clock: Unified time abstraction
- domain: Shared entity types
- exceptions: Custom exception hierarchy
- constants: System-wide constants
- logging_config: Process logging setup
- config: Environment configuration (imports every layer's
  config dataclass, so import it as ``core.config`` directly)
"""

from core.clock import ClockProtocol, MockClock, SystemClock, get_clock
from core.exceptions import BrokerageException
from core.logging_config import setup_logging

__all__ = [
    "ClockProtocol",
    "MockClock",
    "SystemClock",
    "get_clock",
    "BrokerageException",
    "setup_logging",
]
