"""ASGI binding.

:class:`BlockUserAgentsMiddleware` mounts the filter in any ASGI
application (Starlette, FastAPI, ...)::

    app.add_middleware(BlockUserAgentsMiddleware, config="block-useragents.yaml")

Only ``http`` scopes are filtered; lifespan and websocket scopes pass
through untouched.  Rejected requests receive an empty ``403`` response.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from starlette.datastructures import Headers
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from block_useragents.core.config import FilterConfig, load_config
from block_useragents.core.interfaces import BlockedRequestLogger
from block_useragents.core.types import FORBIDDEN, HTTPRequest
from block_useragents.evaluator import DEFAULT_FILTER_NAME
from block_useragents.filter import build_evaluator

ConfigSource = FilterConfig | Mapping[str, Any] | str | os.PathLike[str]


def request_from_scope(scope: Scope) -> HTTPRequest:
    """Build an :class:`HTTPRequest` from an ASGI ``http`` scope."""
    headers = Headers(scope=scope)

    client = scope.get("client")
    remote_addr = f"{client[0]}:{client[1]}" if client else ""

    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope.get("path", "")
    query = scope.get("query_string", b"")
    request_uri = f"{path}?{query.decode('latin-1')}" if query else path

    return HTTPRequest(
        user_agent=headers.get("user-agent", ""),
        remote_addr=remote_addr,
        host=headers.get("host", ""),
        request_uri=request_uri,
    )


def _resolve_config(config: ConfigSource) -> FilterConfig:
    if isinstance(config, FilterConfig):
        return config
    if isinstance(config, (str, os.PathLike)):
        return load_config(config)
    return FilterConfig.from_mapping(config)


class BlockUserAgentsMiddleware:
    """An ASGI middleware enforcing the User-Agent allow-list.

    Parameters
    ----------
    app:
        The downstream ASGI application.
    config:
        A :class:`FilterConfig`, a parsed mapping, or the path of a YAML or
        JSON configuration file.  Compiled once, here.
    name:
        Instance name used in rejection log lines.
    blocked_logger:
        Optional sink for rejections; defaults to stdlib logging.

    Raises
    ------
    ConfigurationError
        If the configuration cannot be loaded or compiled.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: ConfigSource,
        name: str = DEFAULT_FILTER_NAME,
        blocked_logger: BlockedRequestLogger | None = None,
    ) -> None:
        self.app = app
        self.evaluator = build_evaluator(
            _resolve_config(config), name, blocked_logger=blocked_logger
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        verdict = self.evaluator.evaluate_request(request_from_scope(scope))
        if verdict.is_rejection:
            response = Response(status_code=FORBIDDEN)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
