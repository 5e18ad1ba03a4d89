"""Command-line interface for reshard."""
