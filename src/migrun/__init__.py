"""migrun - direction-aware database migration runner."""

__version__ = "1.0.0"
