"""Core of a label-aware key-value configuration service."""

__version__ = "0.1.0"