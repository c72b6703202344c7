"""
Shared Core Module
==================

Event system and configuration.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Configuration
from .configuration import (
    ConfigManager,
    LoggingConfig,
    StoreConfig,
    SystemConfig,
    ValidationLevel,
    get_config,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Configuration
    "ConfigManager",
    "LoggingConfig",
    "StoreConfig",
    "SystemConfig",
    "ValidationLevel",
    "get_config",
]
