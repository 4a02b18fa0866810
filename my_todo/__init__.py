"""Tasks and labels over a swappable in-memory or relational store."""

__version__ = "0.1.0"
