"""Command-line interface for lambda prune."""
