"""
External toolchain wrappers: git, the C compiler and the language registry.
"""

from .compiler import GrammarCompiler, find_file
from .git import clone_repository
from .registry import LanguageRegistry

__all__ = ["GrammarCompiler", "LanguageRegistry", "clone_repository", "find_file"]
