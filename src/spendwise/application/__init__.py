"""Application layer: use cases over the trash domain."""
