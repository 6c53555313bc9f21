"""
Background work for the dashboard: blocking calls run on daemon threads and
their results come back through a queue drained on the Tk main thread.
"""
import logging
import threading
from queue import Empty, Queue
from typing import Any, Callable, List, Optional


class TaskManager:
    def __init__(self):
        self.result_queue: Queue = Queue()
        self.logger = logging.getLogger("TaskManager")
        self._threads: List[threading.Thread] = []
        self._lock = threading.Lock()
        self._stopped = False

    def submit(
        self,
        name: str,
        work: Callable[[], Any],
        on_result: Callable[[Any], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> bool:
        """Run work() on a worker thread. on_result/on_error are called later from drain()."""
        with self._lock:
            if self._stopped:
                self.logger.warning(f"Task manager stopped, dropping task {name}")
                return False
            self._threads = [t for t in self._threads if t.is_alive()]
            thread = threading.Thread(
                target=self._run_task,
                args=(name, work, on_result, on_error),
                name=f"task-{name}",
                daemon=True,
            )
            self._threads.append(thread)
        self.logger.debug(f"Starting task {name}")
        thread.start()
        return True

    def _run_task(self, name, work, on_result, on_error) -> None:
        try:
            result = work()
        except Exception as e:
            self.logger.exception(f"Task {name} failed: {e}")
            if on_error is not None:
                self.result_queue.put((name, on_error, e))
            return
        self.result_queue.put((name, on_result, result))

    def drain(self) -> int:
        """Deliver finished results to their callbacks on the calling thread."""
        delivered = 0
        while True:
            try:
                name, callback, payload = self.result_queue.get_nowait()
            except Empty:
                break
            self.logger.debug(f"Processing task result for {name}")
            try:
                callback(payload)
            except Exception as e:
                self.logger.error(f"Error handling result of task {name}: {e}", exc_info=True)
            delivered += 1
        return delivered

    def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Join every worker started so far."""
        with self._lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)

    def stop(self) -> None:
        """Refuse new work. Running workers are daemons and die with the process."""
        with self._lock:
            self._stopped = True
