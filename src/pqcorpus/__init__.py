"""Deterministic Parquet seed corpus generator."""

__version__ = "0.1.0"
