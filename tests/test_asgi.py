"""Tests for the ASGI middleware binding."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from block_useragents import (
    BlockedRequestLogger,
    BlockUserAgentsMiddleware,
    FilterConfig,
    HTTPRequest,
    InMemoryBlockedRequestLogger,
    NoAllowedBrowsers,
    Verdict,
)
from block_useragents.wire import request_from_scope

CHROME_ANDROID = "Mozilla/5.0 (Linux; Android 14) Chrome/120.0.6099.144 Mobile Safari/537.36"
CHROME_WINDOWS = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0.0.0 Safari/537.36"

CONFIG = {
    "allowedBrowsers": [
        {"name": "Chrome", "pattern": r"Chrome/12[0-1]"},
        {"name": "Firefox", "versionThreshold": ">122"},
    ],
    "allowedOSTypes": ["Android"],
}


async def homepage(request: Request) -> PlainTextResponse:
    return PlainTextResponse("ok")


def _app(config: object, sink: BlockedRequestLogger) -> Starlette:
    app = Starlette(routes=[Route("/", homepage)])
    app.add_middleware(
        BlockUserAgentsMiddleware,
        config=config,
        name="edge",
        blocked_logger=sink,
    )
    return app


class FailingBlockedRequestLogger:
    """A blocked logger whose sink is unavailable."""

    def log_blocked(
        self, filter_name: str, verdict: Verdict, request: HTTPRequest
    ) -> None:
        raise OSError("log sink down")


@pytest.fixture
def sink() -> InMemoryBlockedRequestLogger:
    return InMemoryBlockedRequestLogger()


@pytest.fixture
def client(sink: InMemoryBlockedRequestLogger) -> TestClient:
    return TestClient(_app(CONFIG, sink))


class TestMiddleware:
    """End-to-end behaviour through a Starlette application."""

    def test_allowed_request_reaches_app(self, client: TestClient) -> None:
        response = client.get("/", headers={"User-Agent": CHROME_ANDROID})
        assert response.status_code == 200
        assert response.text == "ok"

    def test_unsupported_os_is_forbidden(
        self, client: TestClient, sink: InMemoryBlockedRequestLogger
    ) -> None:
        response = client.get("/?a=1", headers={"User-Agent": CHROME_WINDOWS})
        assert response.status_code == 403
        assert response.content == b""

        (entry,) = sink.entries
        assert entry.filter_name == "edge"
        assert entry.verdict is Verdict.REJECT_UNSUPPORTED_OS
        assert entry.record.user_agent == CHROME_WINDOWS
        assert entry.record.host == "testserver"
        assert entry.record.request_uri == "/?a=1"
        assert entry.record.remote_addr.startswith("testclient:")

    def test_unsupported_browser_is_forbidden(self, client: TestClient) -> None:
        response = client.get("/", headers={"User-Agent": "curl/8.4.0"})
        assert response.status_code == 403

    def test_empty_user_agent_is_forbidden(
        self, client: TestClient, sink: InMemoryBlockedRequestLogger
    ) -> None:
        response = client.get("/", headers={"User-Agent": ""})
        assert response.status_code == 403
        assert sink.entries[0].verdict is Verdict.REJECT_NO_USER_AGENT

    def test_rejection_skips_downstream_404(self, client: TestClient) -> None:
        """Unknown routes are still rejected before routing."""
        response = client.get("/missing", headers={"User-Agent": "curl/8.4.0"})
        assert response.status_code == 403

    def test_config_from_model(self, sink: InMemoryBlockedRequestLogger) -> None:
        client = TestClient(_app(FilterConfig.from_mapping(CONFIG), sink))
        response = client.get("/", headers={"User-Agent": CHROME_ANDROID})
        assert response.status_code == 200

    def test_config_from_file(
        self, tmp_path: Path, sink: InMemoryBlockedRequestLogger
    ) -> None:
        path = tmp_path / "ua.yaml"
        path.write_text(
            "allowedBrowsers:\n  - name: Firefox\n    versionThreshold: '>122'\n",
            encoding="utf-8",
        )
        client = TestClient(_app(str(path), sink))
        ok = client.get("/", headers={"User-Agent": "Gecko/20100101 Firefox/123.0"})
        old = client.get("/", headers={"User-Agent": "Gecko/20100101 Firefox/122.0"})
        assert ok.status_code == 200
        assert old.status_code == 403

    def test_invalid_config_raises_at_construction(self) -> None:
        async def app(scope, receive, send):  # type: ignore[no-untyped-def]
            raise AssertionError("not reached")

        with pytest.raises(NoAllowedBrowsers):
            BlockUserAgentsMiddleware(app, config={"allowedBrowsers": []})

    def test_failing_blocked_logger_still_403(self) -> None:
        client = TestClient(
            _app(CONFIG, FailingBlockedRequestLogger()), raise_server_exceptions=False
        )
        response = client.get("/", headers={"User-Agent": "curl/8.4.0"})
        assert response.status_code == 403

    def test_ready_log_line(self, caplog: pytest.LogCaptureFixture) -> None:
        async def app(scope, receive, send):  # type: ignore[no-untyped-def]
            raise AssertionError("not reached")

        with caplog.at_level(logging.INFO, logger="block_useragents.filter"):
            BlockUserAgentsMiddleware(app, config=CONFIG, name="edge")
        assert "edge: filter ready (2 browser rule(s), 1 OS pattern(s))" in caplog.text


class TestRequestFromScope:
    """Mapping an ASGI scope to the filter's request view."""

    def test_full_scope(self) -> None:
        scope = {
            "type": "http",
            "path": "/café",
            "raw_path": b"/caf%C3%A9",
            "query_string": b"q=1",
            "headers": [
                (b"user-agent", b"Chrome/120"),
                (b"host", b"example.com"),
            ],
            "client": ("203.0.113.9", 51234),
        }
        request = request_from_scope(scope)
        assert request.user_agent == "Chrome/120"
        assert request.host == "example.com"
        assert request.remote_addr == "203.0.113.9:51234"
        assert request.request_uri == "/caf%C3%A9?q=1"

    def test_minimal_scope(self) -> None:
        request = request_from_scope({"type": "http", "path": "/", "headers": []})
        assert request.user_agent == ""
        assert request.remote_addr == ""
        assert request.host == ""
        assert request.request_uri == "/"
