"""Input forms backed by reactive state."""

from .add_item import AddItemForm

__all__ = ["AddItemForm"]
