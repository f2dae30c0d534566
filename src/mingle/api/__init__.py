"""HTTP API for the Mingle application."""
