"""Conditional SQL annotations, query building, naming helpers and typed query classes."""

__version__ = "0.1.0"