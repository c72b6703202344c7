"""Application layer: reactive state, forms and the composition root."""
