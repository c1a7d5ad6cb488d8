"""Command line entrypoints for adaptknn."""
