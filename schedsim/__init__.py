"""Discrete-time CPU scheduling simulator with fixed memory partitions."""

__version__ = "0.1.0"
__all__ = ["pcb", "report", "scheduler"]