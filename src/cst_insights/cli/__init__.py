"""Command line interface for cst-insights."""
