"""Repair-order workflow and parts inventory state synchronization."""

__version__ = "0.3.0"
