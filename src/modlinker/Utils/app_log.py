"""
app_log.py
Global app log - forwards messages to whatever front end registered a sink.

The front end calls set_app_log(log_fn) from the thread that owns the mod
and plugin collections.  Library code calls app_log(msg).

Thread safety: messages logged from the owning thread are delivered
immediately.  Messages from any other thread are queued and delivered the
next time the owning thread calls drain_app_log().
"""

from __future__ import annotations

import queue
import threading
from typing import Callable

_log_fn: Callable[[str], None] | None = None
_owner_thread_id: int | None = None
_log_queue: queue.Queue[str] = queue.Queue()


def set_app_log(log_fn: Callable[[str], None] | None) -> None:
    """Register the sink and mark the calling thread as its owner.  None unregisters."""
    global _log_fn, _owner_thread_id
    _log_fn = log_fn
    _owner_thread_id = threading.current_thread().ident if log_fn else None


def drain_app_log() -> int:
    """Deliver queued messages on the owning thread.  Returns how many were sent."""
    if _log_fn is None:
        return 0
    sent = 0
    while True:
        try:
            msg = _log_queue.get_nowait()
        except queue.Empty:
            break
        _log_fn(msg)
        sent += 1
    return sent


def app_log(message: str) -> None:
    """Write a message to the registered sink (thread-safe).  No-op if none is set."""
    if _log_fn is None:
        return
    if threading.current_thread().ident == _owner_thread_id:
        _log_fn(message)
    else:
        _log_queue.put_nowait(message)
