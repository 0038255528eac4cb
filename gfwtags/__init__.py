"""Resolve Git for Windows releases into SDK tracking lines."""

__version__ = "0.3.0"
