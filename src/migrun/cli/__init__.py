"""Command-line interface for migrun."""
