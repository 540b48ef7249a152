#!/usr/bin/env python3
"""block-useragents quickstart.

Demonstrates the core workflow:

1. Describe the allow-list (browsers and, optionally, operating systems).
2. Build a filter in front of a downstream handler.
3. Send a few requests through it and inspect the responses.
4. Mount the same configuration as ASGI middleware.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import asyncio
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from block_useragents import (
    BlockUserAgentsMiddleware,
    ConfigurationError,
    HTTPRequest,
    HTTPResponse,
    create_filter,
)

CONFIG = {
    "allowedBrowsers": [
        {"name": "Chrome", "pattern": r"Chrome/12[0-9]"},
        {"name": "Firefox", "versionThreshold": ">122"},
        {"name": "Safari", "versionThreshold": "17"},
    ],
    "allowedOSTypes": [r"Windows NT 10\.0", "Android", "Mac OS X"],
}


async def downstream(request: HTTPRequest) -> HTTPResponse:
    return (200, {"Content-Type": "text/plain"}, f"hello from {request.request_uri}")


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s %(message)s")

    # -- Step 1: A configuration error is fatal ------------------------------
    try:
        create_filter({"allowedBrowsers": []}, downstream)
    except ConfigurationError as exc:
        print(f"[1] Rejected configuration: {exc.code} {exc.message}")

    # -- Step 2: Build the filter -------------------------------------------
    gate = create_filter(CONFIG, downstream, "quickstart")
    print("[2] Filter ready: quickstart")

    # -- Step 3: Evaluate requests ------------------------------------------
    samples = [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/124.0.0.0 Safari/537.36",
        "Mozilla/5.0 (X11; Linux x86_64; rv:123.0) Gecko/20100101 Firefox/123.0",
        "Mozilla/5.0 (Android 14; Mobile; rv:121.0) Gecko/121.0 Firefox/121.0",
        "curl/8.4.0",
        "",
    ]
    for ua in samples:
        request = HTTPRequest(
            user_agent=ua, remote_addr="192.0.2.10:40000", host="example.com", request_uri="/"
        )
        status, _, _ = await gate(request)
        print(f"[3] {status}  {ua or '<no User-Agent>'}")

    status, _, _ = await gate(None)
    print(f"[3] {status}  <absent request>")

    # -- Step 4: Same configuration as ASGI middleware ------------------------
    async def homepage(request: Request) -> PlainTextResponse:
        return PlainTextResponse("ok")

    app = Starlette(routes=[Route("/", homepage)])
    app.add_middleware(BlockUserAgentsMiddleware, config=CONFIG, name="quickstart-asgi")
    print("[4] Starlette app with BlockUserAgentsMiddleware:", app)


if __name__ == "__main__":
    asyncio.run(main())
