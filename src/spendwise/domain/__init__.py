"""Domain layer: entity kinds, tombstones and the rules around them."""
