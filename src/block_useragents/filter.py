"""User-Agent filter -- the host-facing entry point.

:func:`create_filter` validates a configuration, compiles it once and
returns a :class:`UserAgentFilter` wrapping the next handler of the host's
request pipeline.  Awaiting the filter with a request either forwards it
unchanged or answers with an empty response:

* absent request -> ``400``
* any rejection verdict -> ``403``
* forward -> whatever the next handler returns
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from block_useragents.core.config import FilterConfig
from block_useragents.core.errors import MalformedRequest
from block_useragents.core.interfaces import BlockedRequestLogger
from block_useragents.core.types import (
    FORBIDDEN,
    HTTPHandler,
    HTTPRequest,
    HTTPResponse,
    Verdict,
)
from block_useragents.evaluator import DEFAULT_FILTER_NAME, RequestEvaluator
from block_useragents.matching.compiler import compile_matchers

logger = logging.getLogger(__name__)


class UserAgentFilter:
    """Allow-list filter in front of *next_handler*.

    Build instances with :func:`create_filter`; the constructor expects an
    already-built :class:`RequestEvaluator`.
    """

    def __init__(self, evaluator: RequestEvaluator, next_handler: HTTPHandler) -> None:
        self._evaluator = evaluator
        self._next = next_handler

    @property
    def name(self) -> str:
        return self._evaluator.name

    @property
    def evaluator(self) -> RequestEvaluator:
        return self._evaluator

    def check(self, request: HTTPRequest | None) -> Verdict:
        """Return the verdict for *request* without dispatching it.

        Rejections are logged.  Raises :class:`MalformedRequest` for an
        absent request.
        """
        return self._evaluator.evaluate_request(request)

    async def __call__(self, request: HTTPRequest | None) -> HTTPResponse:
        if not isinstance(request, HTTPRequest):
            return (MalformedRequest.http_status, {}, "")

        verdict = self._evaluator.evaluate_request(request)
        if verdict.is_rejection:
            return (FORBIDDEN, {}, "")

        return await self._next(request)


def build_evaluator(
    config: FilterConfig | Mapping[str, Any],
    name: str = DEFAULT_FILTER_NAME,
    *,
    blocked_logger: BlockedRequestLogger | None = None,
) -> RequestEvaluator:
    """Validate and compile *config* into a ready :class:`RequestEvaluator`.

    Shared by :func:`create_filter` and the ASGI middleware.
    """
    if not isinstance(config, FilterConfig):
        config = FilterConfig.from_mapping(config)

    matchers = compile_matchers(config)
    logger.info(
        "%s: filter ready (%d browser rule(s), %d OS pattern(s))",
        name,
        len(matchers.browsers),
        len(matchers.os_patterns),
    )
    return RequestEvaluator(matchers, name=name, blocked_logger=blocked_logger)


def create_filter(
    config: FilterConfig | Mapping[str, Any],
    next_handler: HTTPHandler,
    name: str = DEFAULT_FILTER_NAME,
    *,
    blocked_logger: BlockedRequestLogger | None = None,
) -> UserAgentFilter:
    """Construct a filter from *config*.

    Parameters
    ----------
    config:
        A :class:`FilterConfig` or a parsed mapping using the
        ``allowedBrowsers`` / ``allowedOSTypes`` schema.
    next_handler:
        Called with the unchanged request when it is allowed through.
    name:
        Instance name used in rejection log lines.
    blocked_logger:
        Optional sink for rejections; defaults to stdlib logging.

    Raises
    ------
    ConfigurationError
        If the configuration is empty, incomplete, or contains an invalid
        pattern.  No filter is created.
    """
    evaluator = build_evaluator(config, name, blocked_logger=blocked_logger)
    return UserAgentFilter(evaluator, next_handler)
