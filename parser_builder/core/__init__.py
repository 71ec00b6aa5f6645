"""Core build pipeline module."""

from parser_builder.core.engine import BuildEngine, artifact_path, language_slug, repo_destination
from parser_builder.core.parallel import (
    ParallelBuilder,
    ParallelBuildResult,
    WorkerResult,
    WorkerStatus,
)
from parser_builder.core.summary import format_summary

__all__ = [
    "BuildEngine",
    "artifact_path",
    "language_slug",
    "repo_destination",
    "ParallelBuilder",
    "ParallelBuildResult",
    "WorkerResult",
    "WorkerStatus",
    "format_summary",
]
