import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Callable, Optional, Set

from uni_research.config.config import ExecutorConfig

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)


# =============================================================================
#   BoundedTaskExecutor
# =============================================================================
class BoundedTaskExecutor:
    """Thread pool with a bounded backlog and caller-runs rejection.

    At most ``max_workers + queue_capacity`` tasks are accepted at a time.
    When that backlog is full, ``submit`` runs the task in the calling thread
    and hands back an already-completed future, which slows the caller down
    instead of dropping work. Submit from worker threads only (plain ``def``
    routes run on FastAPI's threadpool): a caller-run on the event loop
    thread would block every request.
    """

    def __init__(
        self,
        max_workers: int,
        queue_capacity: int = 100,
        thread_name_prefix: str = "ai-task-",
        await_termination_seconds: float = 60,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if queue_capacity < 0:
            raise ValueError("queue_capacity must not be negative")

        self.max_workers = max_workers
        self.queue_capacity = queue_capacity
        self.await_termination_seconds = await_termination_seconds

        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._slots = threading.BoundedSemaphore(max_workers + queue_capacity)
        self._in_flight: Set[Future] = set()
        self._lock = threading.Lock()
        self._shutdown = False

        logger.info(
            "Task executor ready: max_workers=%d, queue_capacity=%d, prefix='%s'",
            max_workers, queue_capacity, thread_name_prefix,
        )

    # -------------------------------------------------------------------------
    @classmethod
    def from_config(cls, config: ExecutorConfig) -> "BoundedTaskExecutor":
        """Build an executor from the ``executor`` section of config.yml."""
        logger.info("Initializing task executor, CPU count: %s", os.cpu_count())
        return cls(
            max_workers=config.resolved_max_workers,
            queue_capacity=config.queue_capacity,
            thread_name_prefix=config.thread_name_prefix,
            await_termination_seconds=config.await_termination_seconds,
        )

    # -------------------------------------------------------------------------
    @property
    def in_flight(self) -> int:
        """Number of pooled tasks that are queued or running."""
        with self._lock:
            return len(self._in_flight)

    # -------------------------------------------------------------------------
    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Schedule ``fn(*args, **kwargs)``.

        Returns:
            A future for the call's outcome.

        Raises:
            RuntimeError: If the executor has been shut down.
        """
        if self._shutdown:
            raise RuntimeError("cannot schedule new tasks after shutdown")

        if not self._slots.acquire(blocking=False):
            logger.warning(
                "Task backlog full (%d); running %s in caller thread.",
                self.max_workers + self.queue_capacity, getattr(fn, "__name__", fn),
            )
            return self._run_in_caller(fn, *args, **kwargs)

        try:
            future = self._pool.submit(fn, *args, **kwargs)
        except RuntimeError:
            self._slots.release()
            raise

        with self._lock:
            self._in_flight.add(future)
        future.add_done_callback(self._release)
        return future

    def _release(self, future: Future) -> None:
        with self._lock:
            self._in_flight.discard(future)
        self._slots.release()

    @staticmethod
    def _run_in_caller(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    # -------------------------------------------------------------------------
    def shutdown(self, wait_for_tasks: bool = True) -> None:
        """Stop accepting tasks.

        With ``wait_for_tasks`` the call blocks until queued and running tasks
        finish, at most ``await_termination_seconds``; tasks still pending
        after that are cancelled where possible.
        """
        if self._shutdown:
            return
        self._shutdown = True

        with self._lock:
            pending = set(self._in_flight)

        if wait_for_tasks and pending:
            logger.info("Waiting for %d task(s) to complete.", len(pending))
            _, not_done = wait(pending, timeout=self.await_termination_seconds)
            if not_done:
                logger.warning(
                    "%d task(s) still running after %.0f s; cancelling queued ones.",
                    len(not_done), self.await_termination_seconds,
                )
                for future in not_done:
                    future.cancel()

        self._pool.shutdown(wait=False, cancel_futures=not wait_for_tasks)
        logger.info("Task executor shut down.")

    def __enter__(self) -> "BoundedTaskExecutor":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        self.shutdown(wait_for_tasks=True)
