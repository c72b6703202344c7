"""
Tally Shared Kernel
===================

Framework-free building blocks used by the application layer.

Architecture:
- core: EventBus, events, configuration
- infrastructure: the in-memory item store
- domain: item models and input rules
"""

__version__ = "0.1.0"

__all__ = []
