"""Fetch, clone and build tree-sitter grammars listed on the tree-sitter wiki."""

__version__ = "0.1.0"
