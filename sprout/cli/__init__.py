"""Command line interface for Sprout."""
