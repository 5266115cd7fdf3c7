"""Passive ARP binding logger."""

__version__ = "1.0.0"
