"""Request evaluator.

Applies a :class:`~block_useragents.matching.CompiledMatcherSet` to one
request at a time:

1. **User-Agent present** -- an empty or missing header is rejected
   without consulting any matcher.
2. **Browser allow-list** -- rules are tried in configured order; the first
   match wins.
3. **OS allow-list** -- only when configured; the first match wins.  An
   empty list does not filter by OS.
4. **Forward**.

Evaluation keeps no state between requests; the same matcher set and the
same header always produce the same verdict.
"""
from __future__ import annotations

import logging

from block_useragents.core.errors import MalformedRequest
from block_useragents.core.interfaces import (
    BlockedRequestLogger,
    LoggingBlockedRequestLogger,
)
from block_useragents.core.types import HTTPRequest, Verdict
from block_useragents.matching.compiler import CompiledMatcherSet
from block_useragents.matching.matchers import browser_matches, os_matches

logger = logging.getLogger(__name__)

DEFAULT_FILTER_NAME = "block-useragents"


class RequestEvaluator:
    """Produces a :class:`Verdict` for each request.

    Parameters
    ----------
    matchers:
        The compiled matcher set; shared read-only across requests.
    name:
        Filter instance name, prefixed to rejection log lines.
    blocked_logger:
        Receives every rejection.  Defaults to
        :class:`LoggingBlockedRequestLogger`.
    """

    def __init__(
        self,
        matchers: CompiledMatcherSet,
        *,
        name: str = DEFAULT_FILTER_NAME,
        blocked_logger: BlockedRequestLogger | None = None,
    ) -> None:
        self._matchers = matchers
        self._name = name
        self._blocked_logger = blocked_logger or LoggingBlockedRequestLogger()

    @property
    def name(self) -> str:
        return self._name

    @property
    def matchers(self) -> CompiledMatcherSet:
        return self._matchers

    def evaluate(self, user_agent: str | None) -> Verdict:
        """Return the verdict for a raw ``User-Agent`` value.  No side effects."""
        if not user_agent:
            return Verdict.REJECT_NO_USER_AGENT

        if not any(
            browser_matches(matcher, user_agent)
            for matcher in self._matchers.browsers
        ):
            return Verdict.REJECT_UNSUPPORTED_BROWSER

        os_patterns = self._matchers.os_patterns
        if os_patterns and not any(
            os_matches(pattern, user_agent) for pattern in os_patterns
        ):
            return Verdict.REJECT_UNSUPPORTED_OS

        return Verdict.FORWARD

    def evaluate_request(self, request: HTTPRequest | None) -> Verdict:
        """Evaluate *request* and report a rejection to the blocked logger.

        A failing blocked logger never changes the verdict; the rejection
        is then written as plain text to this module's logger.

        Raises
        ------
        MalformedRequest
            If *request* is absent.  Nothing is logged in that case.
        """
        if not isinstance(request, HTTPRequest):
            raise MalformedRequest(
                details={"received": type(request).__name__},
            )

        verdict = self.evaluate(request.user_agent)
        if verdict.is_rejection:
            try:
                self._blocked_logger.log_blocked(self._name, verdict, request)
            except Exception:
                logger.warning(
                    "%s: Blocked (%s) - %s",
                    self._name,
                    verdict.reason,
                    request.user_agent or "",
                    exc_info=True,
                )
        return verdict
