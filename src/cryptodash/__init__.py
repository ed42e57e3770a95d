"""Crypto portfolio dashboard: prices, holdings, snapshots and alerts."""

__version__ = "0.1.0"
