"""Collected: slash commands rendered into posts."""

__version__ = "0.1.0"
