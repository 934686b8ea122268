"""Batch coordinator.

Runs the per-file pipeline over many files with a fixed pool of worker
threads:
- Work queue: FileTask objects, bounded for backpressure
- N worker threads, each pulling one file at a time
- Shutdown event for cancellation

Each file is handed to exactly one worker, so workers never touch the same
path and no locking around file work is needed.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from queue import Empty, Queue
from typing import Callable, Iterable, List, Optional

from crccheck.common import auto_detect_io_workers
from .discovery import FileTask, collect_tasks
from .pipeline import FileResult, check_file, failed_result

logger = logging.getLogger(__name__)

ResultCallback = Callable[[FileResult], None]


@dataclass
class BatchResult:
    """Results of one batch run.

    Attributes:
        results: One FileResult per processed file, in completion order
        cancelled: Number of files not processed because of cancellation
    """
    results: List[FileResult] = field(default_factory=list)
    cancelled: int = 0

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if r.failed]


class BatchCoordinator:
    """Checks many files concurrently with a bounded thread pool.

    The pool size is fixed when the coordinator is created: an explicit
    ``worker_threads`` value, or ``worker_multiplier`` times the CPU count.
    """

    def __init__(
        self,
        worker_threads: Optional[int] = None,
        worker_multiplier: float = 4.0,
        queue_maxsize: int = 1000,
    ):
        """Initialize coordinator.

        Args:
            worker_threads: Number of worker threads (default: multiplier × CPU count)
            worker_multiplier: CPU count multiplier used when worker_threads is not given
            queue_maxsize: Work queue size limit
        """
        if worker_threads is not None and worker_threads < 1:
            raise ValueError(f"worker_threads must be positive, got {worker_threads}")

        self.worker_threads = worker_threads or auto_detect_io_workers(multiplier=worker_multiplier)
        self.queue_maxsize = queue_maxsize
        self.shutdown_event = threading.Event()
        self._report_lock = threading.Lock()

        logger.info(
            f"Initialized BatchCoordinator: {{'threads': {self.worker_threads}, 'queue_maxsize': {queue_maxsize}}}"
        )

    def cancel(self) -> None:
        """Stop processing new files.

        Files already being checked finish, including their rename, so no
        file is left half-renamed. Safe to call from a signal handler.
        """
        self.shutdown_event.set()

    @property
    def cancelled(self) -> bool:
        return self.shutdown_event.is_set()

    def run(
        self,
        paths: Iterable[Path | str],
        update: bool = False,
        add: bool = False,
        on_result: Optional[ResultCallback] = None,
    ) -> BatchResult:
        """Check every candidate file and wait for all of them.

        Args:
            paths: A single directory, or a list of file paths
            update: Rewrite tokens that do not match the content
            add: Add a token to names that have none
            on_result: Called once per finished file, never concurrently

        Returns:
            BatchResult with all per-file results
        """
        tasks = collect_tasks(paths)
        logger.info(f"Starting batch: {{'files': {len(tasks)}, 'update': {update}, 'add': {add}}}")

        batch = BatchResult()
        if not tasks:
            return batch

        work_queue: Queue = Queue(maxsize=self.queue_maxsize)
        thread_count = min(self.worker_threads, len(tasks))

        threads = []
        for i in range(thread_count):
            thread = threading.Thread(
                target=self._worker_main,
                args=(i, work_queue, batch, update, add, on_result),
                name=f"Worker-{i}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

        dispatched = 0
        for task in tasks:
            if self.shutdown_event.is_set():
                break
            work_queue.put(task)
            dispatched += 1

        # Wait for work queue to be empty
        work_queue.join()

        # Send sentinel to worker threads
        for _ in threads:
            work_queue.put(None)
        for thread in threads:
            thread.join()

        batch.cancelled += len(tasks) - dispatched
        logger.info(
            f"Batch complete: {{'processed': {len(batch.results)}, 'failed': {len(batch.failed)}, "
            f"'cancelled': {batch.cancelled}}}"
        )
        return batch

    def _worker_main(
        self,
        thread_id: int,
        work_queue: Queue,
        batch: BatchResult,
        update: bool,
        add: bool,
        on_result: Optional[ResultCallback],
    ) -> None:
        """Pull files from the queue until the sentinel arrives.

        After cancellation the worker keeps draining the queue without
        checking files so that the producer and the queue join never block.
        """
        logger.debug(f"Worker thread {thread_id} started")
        processed_count = 0
        error_count = 0

        while True:
            try:
                task = work_queue.get(timeout=0.1)
            except Empty:
                continue

            if task is None:
                work_queue.task_done()
                break

            try:
                if self.shutdown_event.is_set():
                    with self._report_lock:
                        batch.cancelled += 1
                    continue

                result = self._check(thread_id, task, update, add)
                processed_count += 1
                if result.failed:
                    error_count += 1

                with self._report_lock:
                    batch.results.append(result)
                    if on_result is not None:
                        self._notify(on_result, result)
            finally:
                work_queue.task_done()

        logger.debug(
            f"Worker thread {thread_id} shutting down "
            f"(processed={processed_count}, errors={error_count})"
        )

    def _check(self, thread_id: int, task: FileTask, update: bool, add: bool) -> FileResult:
        try:
            result = check_file(task, update=update, add=add)
        except Exception as e:
            logger.error(f"Worker {thread_id} failed to process {task.path}: {e}", exc_info=True)
            return failed_result(task.path, e)

        if result.failed:
            logger.warning(
                f"Check failed: {{'path': {str(task.path)!r}, 'category': {result.error_category!r}, "
                f"'error': {result.error!r}}}",
                extra={"extra_fields": {"path": str(task.path), "error_category": result.error_category}},
            )
        return result

    def _notify(self, on_result: ResultCallback, result: FileResult) -> None:
        try:
            on_result(result)
        except Exception as e:
            logger.error(f"Result callback failed for {result.path}: {e}", exc_info=True)
