"""Host framework bindings.

* **BlockUserAgentsMiddleware** -- pure ASGI middleware (Starlette/FastAPI).
* **request_from_scope** -- builds the filter's request view from an ASGI scope.
"""
from __future__ import annotations

from block_useragents.wire.asgi import BlockUserAgentsMiddleware, request_from_scope

__all__ = [
    "BlockUserAgentsMiddleware",
    "request_from_scope",
]
