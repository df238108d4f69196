"""Command-line interface for bibsql."""
