"""Collaborator interfaces and their default implementations.

The evaluator never calls :mod:`logging` directly; it reports rejections
through a :class:`BlockedRequestLogger` handed to it at construction.  The
default :class:`LoggingBlockedRequestLogger` writes to the standard library
logger ``block_useragents.blocked``.  :class:`InMemoryBlockedRequestLogger`
keeps entries in a list for tests and local debugging.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from block_useragents.core.types import HTTPRequest, RejectionRecord, Verdict

BLOCKED_LOGGER_NAME = "block_useragents.blocked"


@runtime_checkable
class BlockedRequestLogger(Protocol):
    """Sink for rejection events.

    Implementations are called concurrently from every in-flight request
    and MUST be safe under concurrent use.  They MUST NOT raise: a failure
    to log never changes the verdict.
    """

    def log_blocked(
        self, filter_name: str, verdict: Verdict, request: HTTPRequest
    ) -> None:
        """Record that *request* was rejected with *verdict*."""
        ...


class LoggingBlockedRequestLogger:
    """Writes one INFO line per rejected request.

    Line format::

        <filter_name>: Blocked (<reason>) - {"user-agent": ..., "ip": ..., "host": ..., "uri": ...}

    If the record cannot be serialised the JSON part is replaced with the
    raw User-Agent.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(BLOCKED_LOGGER_NAME)

    def log_blocked(
        self, filter_name: str, verdict: Verdict, request: HTTPRequest
    ) -> None:
        try:
            payload = RejectionRecord.from_request(request).to_json()
        except (TypeError, ValueError):
            payload = request.user_agent or ""
        self._logger.info(
            "%s: Blocked (%s) - %s", filter_name, verdict.reason, payload
        )


@dataclass(frozen=True, slots=True)
class BlockedEntry:
    """One event captured by :class:`InMemoryBlockedRequestLogger`."""

    filter_name: str
    verdict: Verdict
    record: RejectionRecord


class InMemoryBlockedRequestLogger:
    """Collects rejection events in memory.  Thread-safe."""

    def __init__(self) -> None:
        self._entries: list[BlockedEntry] = []
        self._lock = threading.Lock()

    def log_blocked(
        self, filter_name: str, verdict: Verdict, request: HTTPRequest
    ) -> None:
        entry = BlockedEntry(
            filter_name=filter_name,
            verdict=verdict,
            record=RejectionRecord.from_request(request),
        )
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> list[BlockedEntry]:
        """Return a snapshot of the captured entries."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
