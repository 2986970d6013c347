"""Rooster Ranch: farm islands, RC economy, professions and market."""

__version__ = "0.1.0"
