"""Command line interface for parser-builder."""
