"""File-format adapters around the core engine."""
