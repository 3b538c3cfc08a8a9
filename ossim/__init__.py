"""Simulations of classic operating-system algorithms: scheduling, memory, deadlock, a toy machine, paging and synchronisation."""

__version__ = "0.1.0"