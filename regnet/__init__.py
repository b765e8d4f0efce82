"""Ledger state-transition core for a property registration network."""

__version__ = "0.1.0"
