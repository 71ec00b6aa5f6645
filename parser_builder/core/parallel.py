"""
Parallel execution manager for grammar builds.
Runs one worker thread per descriptor, at most `max_workers` at a time, and aggregates results.
"""

import logging
import queue
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from parser_builder.config.builder_config import DEFAULT_THREADS, ParserDescriptor
from parser_builder.config.config_utils import resolve_thread_count

BuildTask = Callable[[ParserDescriptor], Any]


class WorkerStatus(Enum):
    """Status codes for worker threads."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class WorkerResult:
    """Result from a single worker."""
    worker_id: int
    descriptor: ParserDescriptor
    status: WorkerStatus
    artifact_path: Optional[str] = None
    error_message: Optional[str] = None
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status == WorkerStatus.COMPLETED


@dataclass
class ParallelBuildResult:
    """Aggregated results from all workers."""
    total_workers: int
    successful_workers: int
    failed_workers: int
    worker_results: List[WorkerResult] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    def failures(self) -> List[WorkerResult]:
        return sorted(
            (r for r in self.worker_results if not r.succeeded),
            key=lambda r: (r.descriptor.language.lower(), r.descriptor.url),
        )

    def by_language(self) -> Dict[str, Dict[str, int]]:
        """Per-language success/failure counts."""
        succeeded = Counter(r.descriptor.language for r in self.worker_results if r.succeeded)
        failed = Counter(r.descriptor.language for r in self.worker_results if not r.succeeded)
        return {
            lang: {"succeeded": succeeded.get(lang, 0), "failed": failed.get(lang, 0)}
            for lang in sorted(set(succeeded) | set(failed), key=str.lower)
        }


def worker(
    worker_id: int,
    descriptor: ParserDescriptor,
    task: BuildTask,
    slots: threading.BoundedSemaphore,
    result_queue: "queue.Queue[WorkerResult]"
) -> None:
    """
    Worker function that runs in its own thread to build a single grammar.

    Args:
        worker_id: Unique identifier for this worker
        descriptor: Language and repository to build
        task: Callable doing the clone and build, returns the artifact path
        slots: Concurrency limiter shared by all workers of the run
        result_queue: Queue to send the result back to the scheduler
    """
    status = WorkerStatus.PENDING
    artifact = None
    error_message = None
    start_time = time.time()

    try:
        with slots:
            status = WorkerStatus.RUNNING
            start_time = time.time()
            artifact = task(descriptor)
        status = WorkerStatus.COMPLETED
        logging.info(f"Done with {descriptor.language}")

    except Exception as e:
        status = WorkerStatus.FAILED
        error_message = str(e) or e.__class__.__name__
        logging.warning(f"failed for {descriptor.language} : {error_message}")

    finally:
        result = WorkerResult(
            worker_id=worker_id,
            descriptor=descriptor,
            status=status,
            artifact_path=str(artifact) if isinstance(artifact, (str, Path)) else None,
            error_message=error_message,
            duration_seconds=time.time() - start_time,
        )
        result_queue.put(result)


class ParallelBuilder:
    """
    Manages parallel grammar builds with a bounded number of concurrent tasks.
    """

    def __init__(self, task: BuildTask, max_workers: int = DEFAULT_THREADS):
        """
        Initialize the parallel builder.

        Args:
            task: Unit of work run for every descriptor
            max_workers: Maximum number of tasks running at once (invalid values fall back to the default)
        """
        self.task = task
        self.max_workers = resolve_thread_count(max_workers)
        self._logger = logging.getLogger(__name__)

    def run(
        self,
        descriptors: Sequence[ParserDescriptor],
        progress_callback: Optional[Callable[[WorkerResult, int, int], None]] = None
    ) -> ParallelBuildResult:
        """
        Build every descriptor and wait for all of them to finish.

        Args:
            descriptors: Grammars to build
            progress_callback: Called with (result, completed, total) as each worker finishes

        Returns:
            ParallelBuildResult with one WorkerResult per descriptor
        """
        start_time = time.time()
        descriptors = list(descriptors)
        total = len(descriptors)

        if not descriptors:
            self._logger.warning("No parsers to build")
            return ParallelBuildResult(total_workers=0, successful_workers=0, failed_workers=0)

        self._logger.info(f"Starting build of {total} parsers with {min(self.max_workers, total)} workers")

        slots = threading.BoundedSemaphore(self.max_workers)
        result_queue: "queue.Queue[WorkerResult]" = queue.Queue()

        threads: List[threading.Thread] = []
        for i, descriptor in enumerate(descriptors):
            t = threading.Thread(
                target=worker,
                args=(i, descriptor, self.task, slots, result_queue),
                name=f"GrammarBuilder-{i}",
                daemon=True,
            )
            t.start()
            threads.append(t)

        # Every worker puts exactly one result, success or failure.
        results: List[WorkerResult] = []
        for completed in range(1, total + 1):
            result = result_queue.get()
            results.append(result)
            if progress_callback:
                try:
                    progress_callback(result, completed, total)
                except Exception as e:
                    self._logger.error(f"Progress callback failed: {e}")

        for t in threads:
            t.join()

        successful = sum(1 for r in results if r.status == WorkerStatus.COMPLETED)
        failed = len(results) - successful

        return ParallelBuildResult(
            total_workers=len(results),
            successful_workers=successful,
            failed_workers=failed,
            worker_results=results,
            total_duration_seconds=time.time() - start_time,
        )
