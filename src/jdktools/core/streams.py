"""Serialised access to shared output streams."""

from __future__ import annotations

import sys
import threading
import weakref
from typing import TextIO

_REGISTRY_LOCK = threading.Lock()
_STREAM_LOCKS: "weakref.WeakKeyDictionary[object, threading.RLock]" = weakref.WeakKeyDictionary()
_FALLBACK_LOCK = threading.RLock()


def stream_lock(stream: object) -> threading.RLock:
    """Return the lock shared by every writer of ``stream``."""
    with _REGISTRY_LOCK:
        try:
            lock = _STREAM_LOCKS.get(stream)
            if lock is None:
                lock = threading.RLock()
                _STREAM_LOCKS[stream] = lock
            return lock
        except TypeError:
            # Streams without weakref support share one lock.
            return _FALLBACK_LOCK


class SynchronizedWriter:
    """Text stream proxy whose writes never interleave with other writers."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = stream_lock(stream)

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write(self, text: str) -> int:
        with self._lock:
            return self._stream.write(text)

    def writelines(self, lines) -> None:
        with self._lock:
            self._stream.writelines(lines)

    def flush(self) -> None:
        with self._lock:
            self._stream.flush()

    def __getattr__(self, name: str):
        return getattr(self._stream, name)


def synchronized(stream: TextIO | None, *, default: str = "stdout") -> SynchronizedWriter:
    """Wrap ``stream`` (or the current ``sys.stdout``/``sys.stderr``)."""
    if isinstance(stream, SynchronizedWriter):
        return stream
    if stream is None:
        stream = getattr(sys, default)
    return SynchronizedWriter(stream)


def write_block(stream: TextIO, text: str) -> None:
    """Write ``text`` to ``stream`` as one uninterrupted block."""
    if not text:
        return
    writer = synchronized(stream)
    with writer._lock:
        writer.stream.write(text)
        writer.stream.flush()


__all__ = ["SynchronizedWriter", "stream_lock", "synchronized", "write_block"]
