"""Multi-asset portfolio tracking: rate resolution, valuation and rebalancing."""

__version__ = "0.1.0"
