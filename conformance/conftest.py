"""Shared fixtures for filter conformance tests.

Provides a filter factory wired to an always-OK next handler and an
in-memory rejection sink.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from block_useragents import (
    HTTPRequest,
    HTTPResponse,
    InMemoryBlockedRequestLogger,
    UserAgentFilter,
    create_filter,
)


async def ok_handler(request: HTTPRequest) -> HTTPResponse:
    return (200, {}, "ok")


@pytest.fixture()
def blocked() -> InMemoryBlockedRequestLogger:
    return InMemoryBlockedRequestLogger()


@pytest.fixture()
def make_filter(
    blocked: InMemoryBlockedRequestLogger,
) -> Callable[[Mapping[str, Any]], UserAgentFilter]:
    def _make(config: Mapping[str, Any]) -> UserAgentFilter:
        return create_filter(config, ok_handler, "conformance", blocked_logger=blocked)

    return _make
