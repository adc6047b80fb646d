"""Hierarchical command-line todo manager."""

__version__ = "0.1.0"
