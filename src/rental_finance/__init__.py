"""Income statement aggregation for short-term rental properties."""

__version__ = "0.1.0"
