"""FletXr Reactive State Management for the inventory app.

Architecture:
- InventoryState: item list, loading flag, selection and sheet visibility
- AppContainer: container handing all state objects to views
"""

from .inventory_state import InventoryState
from .container import AppContainer

__all__ = ["InventoryState", "AppContainer"]
