"""Command line interface for art3a."""
