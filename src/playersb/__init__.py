"""Data pipeline for the playersb football statistics site."""

__version__ = "0.4.0"
