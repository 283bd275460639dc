"""Contribution planner: rebalancing purchases and retirement projection."""

__version__ = "0.1.0"
