"""Human readable report of a finished build run."""

from typing import List, Optional

from parser_builder.core.parallel import ParallelBuildResult, WorkerResult


def first_line(message: Optional[str]) -> str:
    if not message or not message.strip():
        return "unknown error"
    return message.strip().splitlines()[0]


def format_progress(result: WorkerResult, completed: int, total: int, failed: int) -> str:
    if result.succeeded:
        line = f"Done with {result.descriptor.language}"
    else:
        line = f"Failed for {result.descriptor.language}: {first_line(result.error_message)}"
    return f"[{completed}/{total}] {line} ({failed} failed)"


def format_summary(result: ParallelBuildResult, show_languages: bool = False) -> str:
    """
    Render the aggregate outcome of a run.

    Args:
        result: Aggregated run result
        show_languages: Include the per-language breakdown

    Returns:
        Multi-line report text
    """
    lines: List[str] = [
        f"All tasks completed. {result.successful_workers} succeeded, {result.failed_workers} failed "
        f"(total {result.total_workers}, {result.total_duration_seconds:.1f}s)."
    ]

    if show_languages and result.worker_results:
        lines.append("")
        lines.append("Per language:")
        for lang, counts in result.by_language().items():
            lines.append(f"  {lang}: {counts['succeeded']} succeeded, {counts['failed']} failed")

    failures = result.failures()
    if failures:
        lines.append("")
        lines.append("Failed repositories:")
        for r in failures:
            lines.append(f"  {r.descriptor.language} ({r.descriptor.url}): {first_line(r.error_message)}")

    return "\n".join(lines)
