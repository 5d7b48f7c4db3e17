"""NARA admin portal access control."""

__version__ = "1.0.0"
