"""
Background consumer forwarding invalidation events to the retriever.
"""

import threading
from queue import Queue, Empty
from typing import Optional

from .event import EventType, ShutdownEvent
from modelretriever.logger import get_retriever_logger


class CacheInvalidationListener:
    """
    Consumes events from a queue and hands them to ``retriever.handle_event``.

    Any object putting ``InvalidationEvent``s on the queue (a file watcher, a
    timer, a message consumer) can clear the models cache this way. The
    listener either runs in a daemon thread (``start``/``stop``) or is driven
    synchronously with ``process_pending``. A producer can end the thread by
    putting a ``ShutdownEvent`` on the queue.
    """

    def __init__(self, retriever, events_queue: Optional[Queue] = None, poll_interval: float = 0.5):
        self.retriever = retriever
        self.events_queue: Queue = events_queue if events_queue is not None else Queue()
        self.poll_interval = poll_interval
        self.logger = get_retriever_logger("CacheInvalidationListener")
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start consuming events in a daemon thread."""
        with self._state_lock:
            if self.is_running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name="cache-invalidation-listener", daemon=True
            )
            self._thread.start()
        self.logger.info("Cache invalidation listener started")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """
        Stop the consumer thread and wait for it to finish.

        The thread notices the stop request within one ``poll_interval``.
        Nothing is put on the queue, so a later ``start`` sees only the
        events producers queued.
        """
        with self._state_lock:
            thread = self._thread
            if thread is None:
                return
            self._stop_event.set()
        thread.join(timeout)
        with self._state_lock:
            if self._thread is thread:
                self._thread = None
        self.logger.info("Cache invalidation listener stopped")

    def process_pending(self) -> int:
        """
        Handle every event currently in the queue on the calling thread.

        Returns:
            Number of invalidation events handled
        """
        handled = 0
        while True:
            try:
                event = self.events_queue.get_nowait()
            except Empty:
                return handled
            if self._dispatch(event):
                handled += 1

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                event = self.events_queue.get(timeout=self.poll_interval)
            except Empty:
                continue
            if getattr(event, 'type', None) is EventType.SHUTDOWN:
                break
            try:
                self._dispatch(event)
            except Exception:
                # Keep the consumer alive, the next event gets another chance
                self.logger.exception("Failed to handle invalidation event", received=str(event))

    def _dispatch(self, event) -> bool:
        if getattr(event, 'type', None) is not EventType.INVALIDATION:
            self.logger.debug("Ignoring unsupported event", received=str(event))
            return False
        self.retriever.handle_event(event)
        return True
