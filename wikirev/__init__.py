"""Wiki revision history service for persons, characters and subjects."""

__version__ = "0.1.0"
