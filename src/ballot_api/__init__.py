"""Ballot API: zone-scoped community elections with one-time ballots."""

__version__ = "0.1.0"
