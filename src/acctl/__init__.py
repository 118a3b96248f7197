"""acctl: account administration CLI for the identity store."""

__version__ = "0.3.0"
