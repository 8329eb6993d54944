"""Fan a batch of media paths out to a thread pool.

Probing runs on the pool; result callbacks run on the calling thread, one at a
time, so callers can print or collect without their own locking.
"""

import logging
import os
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from media_inspector.media import MediaInfo

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str], MediaInfo | None]
ResultFn = Callable[[str, MediaInfo], None]


@dataclass
class BatchSummary:
    succeeded: int = 0
    failed: list[str] = field(default_factory=list)
    cancelled: bool = False


class ProbeProgress:
    """Counts finished paths; set cancel_requested to stop a running batch."""

    def __init__(self):
        self._lock = threading.Lock()
        self.total = 0
        self.done = 0
        self.failed = 0
        self.current_file = ""
        self.running = False
        self.cancel_requested = False

    def start(self, total: int):
        with self._lock:
            self.total = total
            self.done = 0
            self.failed = 0
            self.current_file = ""
            self.running = True
            self.cancel_requested = False

    def advance(self, path: str, ok: bool):
        with self._lock:
            self.done += 1
            if not ok:
                self.failed += 1
            self.current_file = os.path.basename(path)

    def finish(self):
        with self._lock:
            self.running = False
            self.cancel_requested = False

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "running": self.running,
                "total": self.total,
                "done": self.done,
                "failed": self.failed,
                "current_file": self.current_file,
                "percent": round(self.done / self.total * 100, 1) if self.total else 0,
            }


class BatchRunner:
    def __init__(self, workers: int = 4):
        self.workers = max(1, workers)

    def run(
        self,
        paths: list[str],
        probe_fn: ProbeFn,
        on_result: ResultFn,
        progress: ProbeProgress | None = None,
    ) -> BatchSummary:
        """Probe every path, calling on_result for each MediaInfo produced.

        A path counts as failed when probe_fn raises or returns None, or when
        on_result raises. Failures are logged and never stop the batch.
        """
        progress = progress or ProbeProgress()
        progress.start(len(paths))
        summary = BatchSummary()

        try:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                pending = {pool.submit(probe_fn, path): path for path in paths}
                for future in as_completed(pending):
                    if progress.cancel_requested:
                        pool.shutdown(wait=False, cancel_futures=True)
                        summary.cancelled = True
                        logger.info("Batch cancelled after %d of %d paths", progress.done, len(paths))
                        break

                    path = pending[future]
                    ok = self._deliver(path, future, on_result)
                    if ok:
                        summary.succeeded += 1
                    else:
                        summary.failed.append(path)
                    progress.advance(path, ok)
        finally:
            progress.finish()

        return summary

    @staticmethod
    def _deliver(path: str, future, on_result: ResultFn) -> bool:
        try:
            info = future.result()
        except Exception:
            logger.exception("Probe failed for: %s", path)
            return False
        if info is None:
            return False
        try:
            on_result(path, info)
        except Exception:
            logger.exception("Result handler failed for: %s", path)
            return False
        return True
