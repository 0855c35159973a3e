"""Reconstruct market-by-price snapshots from market-by-order data."""

__version__ = "0.1.0"