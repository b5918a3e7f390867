"""Shared helpers: logging, console output, errors and filesystem access."""
