"""Command-line entry points for the preparation pipeline."""
