"""Pathway - Linear course progress, landing and navigation."""

__version__ = "0.1.0"
