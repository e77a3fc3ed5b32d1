"""Command-line interface for pgs-or."""
