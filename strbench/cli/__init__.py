"""Command line interface for strbench."""
