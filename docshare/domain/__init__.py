"""Domain layer: enums, exceptions, and value objects (no framework imports)."""
