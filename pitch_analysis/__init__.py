"""Zone-based pitch location classification and aggregation."""

__version__ = "0.1.0"
