"""Custom exceptions for the parser builder."""


class BuilderError(Exception):
    """Base class for every error raised by the parser builder."""


class FetchError(BuilderError):
    """Raised when the parser catalog cannot be downloaded or parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch catalog from {url}: {reason}")


class CloneError(BuilderError):
    """Raised when a grammar repository cannot be cloned."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to clone {url}: {reason}")


class PathConflictError(CloneError):
    """Raised when a second descriptor maps to an already claimed checkout path."""

    def __init__(self, url: str, destination: str):
        self.destination = destination
        super().__init__(url, f"destination {destination} already claimed by another task")


class BuildError(BuilderError):
    """Raised when a grammar cannot be compiled into a shared library."""

    def __init__(self, language: str, reason: str):
        self.language = language
        self.reason = reason
        super().__init__(f"Failed to build grammar for {language}: {reason}")


class RegistryError(BuilderError):
    """Raised when a built grammar cannot be recorded in the language registry."""
