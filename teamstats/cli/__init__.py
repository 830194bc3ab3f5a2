"""Command-line interface for Team Stats."""
