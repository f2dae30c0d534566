"""Command-line helpers for operating a Mingle deployment."""
