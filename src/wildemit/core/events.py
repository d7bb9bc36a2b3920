from __future__ import annotations

import logging
import threading

from concurrent.futures import Executor, ThreadPoolExecutor
from types import TracebackType
from typing import Any, Callable, Iterable, MutableMapping

from .listener import Callback, Listener, same_callback
from .matcher import pattern_matches

_LOG = logging.getLogger(__name__)

NEW_LISTENER = "newListener"
REMOVE_LISTENER = "removeListener"


class Emitter:
    """Thread-safe event emitter with wildcard patterns.

    • Listeners are registered under a *pattern*: an exact event name, a glob
      where ``*`` matches any run of characters, or ``**`` for every event.
    • ``emit_sync()`` runs the matching listeners on the calling thread;
      exceptions **propagate** and abort the remaining fan-out.
    • ``emit_async()`` hands each listener to a worker pool and returns at
      once; listener errors are logged, never raised.
    • The lock only guards the pattern map. Callbacks always run outside it,
      so they may freely call back into the emitter.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        *,
        executor: Executor | None = None,
        thread_name_prefix: str = "wildemit",
    ) -> None:
        self._registry: MutableMapping[str, list[Listener]] = {}
        self._lock = threading.RLock()

        self._max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix
        self._executor = executor
        self._owns_executor = executor is None
        self._executor_lock = threading.RLock()

    def on(self, pattern: str, callback: Callback) -> "Emitter":
        """Register *callback* for every event matching *pattern*."""
        self._add(pattern, callback, once=False)
        return self

    add_listener = on

    def once(self, pattern: str, callback: Callback) -> "Emitter":
        """Like :meth:`on`, but the listener is dropped before its first call."""
        self._add(pattern, callback, once=True)
        return self

    def subscribe(
        self, pattern: str, callback: Callback, *, once: bool = False
    ) -> Callable[[], None]:
        """Register *callback* and return a zero-argument **unsubscribe** function.

        The returned function removes exactly this registration, even when the
        same callback is registered several times under *pattern*.
        """
        record = self._add(pattern, callback, once=once)

        def _unsubscribe() -> None:
            if self._discard(record):
                self.emit_sync(REMOVE_LISTENER, pattern, callback)

        return _unsubscribe

    def remove_listener(self, pattern: str, callback: Callback) -> "Emitter":
        """Remove the first registration of *callback* under *pattern*.

        Unknown patterns or callbacks are ignored.
        """
        if self._remove(pattern, callback):
            self.emit_sync(REMOVE_LISTENER, pattern, callback)
        return self

    off = remove_listener

    def remove_all_listeners(self, pattern: str | None = None) -> "Emitter":
        """Drop every listener (``None``) or only those of the exact *pattern*.

        Bulk removal does not emit ``removeListener``.
        """
        with self._lock:
            if pattern is None:
                self._registry.clear()
            else:
                self._registry.pop(pattern, None)
        _LOG.debug(
            "Removed all listeners for %s", "<all>" if pattern is None else repr(pattern)
        )
        return self

    def reset(self) -> None:
        """Clear the whole registry; also run when a ``with`` block exits."""
        self.remove_all_listeners(None)

    def listeners(self, event: str) -> list[Listener]:
        """Listeners an emit of *event* would reach right now.

        Registration order is kept within one pattern; the order across
        patterns is unspecified.
        """
        with self._lock:
            matched: list[Listener] = []
            for pattern, records in self._registry.items():
                if pattern_matches(pattern, event):
                    matched.extend(records)
        return matched

    def listeners_count(self, event: str) -> int:
        return len(self.listeners(event))

    def event_names(self) -> list[str]:
        with self._lock:
            return list(self._registry)

    def emit_sync(self, event: str, *args: Any) -> "Emitter":
        """Fire *event* on the calling thread, forwarding *args* positionally."""
        for record in self._snapshot(event):
            if record.once and not self._claim(record):
                continue
            record(*args)
        return self

    emit = emit_sync

    def emit_async(self, event: str, args: Iterable[Any] | None = None) -> "Emitter":
        """Schedule every matching listener on the worker pool and return.

        No ordering between listeners and no completion guarantee on return.
        """
        payload = tuple(args or ())
        snapshot = self._snapshot(event)
        if not snapshot:
            return self

        # close() waits for this lock, so the pool cannot be shut down mid-loop.
        with self._executor_lock:
            executor = self._ensure_executor()
            for record in snapshot:
                if record.once and not self._claim(record):
                    continue
                executor.submit(self._run_isolated, event, record, payload)
        return self

    def close(self, wait: bool = True) -> None:
        """Shut down the owned worker pool; a later ``emit_async`` starts a new one."""
        with self._executor_lock:
            executor = self._executor if self._owns_executor else None
            if self._owns_executor:
                self._executor = None
        if executor is not None:
            executor.shutdown(wait=wait)

    def __enter__(self) -> "Emitter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.reset()
        self.close()
        return False

    def __repr__(self) -> str:
        with self._lock:
            patterns = len(self._registry)
            total = sum(len(records) for records in self._registry.values())
        return f"<Emitter patterns={patterns} listeners={total}>"

    def _add(self, pattern: str, callback: Callback, *, once: bool) -> Listener:
        if not isinstance(pattern, str):
            raise TypeError(f"pattern must be a str, got {type(pattern).__name__}")
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        record = Listener(callback=callback, once=once, pattern=pattern)
        with self._lock:
            self._registry.setdefault(pattern, []).append(record)
        _LOG.debug("Added %r", record)

        self.emit_sync(NEW_LISTENER, pattern, callback)
        return record

    def _remove(self, pattern: str, callback: Callback) -> bool:
        with self._lock:
            records = self._registry.get(pattern)
            if not records:
                return False
            for idx, record in enumerate(records):
                if same_callback(record.callback, callback):
                    del records[idx]
                    if not records:
                        del self._registry[pattern]
                    break
            else:
                return False
        _LOG.debug("Removed %r", record)
        return True

    def _discard(self, record: Listener) -> bool:
        """Remove this exact *record*; ``False`` if it is already gone."""
        with self._lock:
            records = self._registry.get(record.pattern)
            if not records:
                return False
            for idx, candidate in enumerate(records):
                if candidate is record:
                    del records[idx]
                    if not records:
                        del self._registry[record.pattern]
                    return True
        return False

    def _claim(self, record: Listener) -> bool:
        """Mark once-listener *record* as fired and drop it from the registry.

        ``False`` only if another emit claimed it first; a record that was
        removed explicitly is still claimable by emits that snapshotted it.
        """
        with self._lock:
            if record.fired:
                return False
            record.fired = True
            self._discard(record)
        return True

    def _snapshot(self, event: str) -> list[Listener]:
        """Listeners fixed for one emit.

        Dispatch claims each once-listener right before calling it; one
        already claimed by a concurrent or re-entrant emit is skipped, so it
        fires at most one time. Explicit removal during the emit does not
        count as a claim.
        """
        snapshot = self.listeners(event)
        if snapshot:
            _LOG.debug("Emitting %r to %d listener(s)", event, len(snapshot))
        return snapshot

    def _ensure_executor(self) -> Executor:
        """Current pool, created on demand. Caller holds ``_executor_lock``."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix=self._thread_name_prefix,
            )
        return self._executor

    @staticmethod
    def _run_isolated(event: str, record: Listener, args: tuple[Any, ...]) -> None:
        try:
            record(*args)
        except Exception:
            _LOG.exception("Listener %r failed while handling %r", record, event)


global_emitter: Emitter = Emitter()
