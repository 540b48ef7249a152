"""Shared domain types.

* ``Verdict`` is a string enum so that it logs and serialises cleanly.
* ``HTTPRequest`` is the minimal view of a request the filter needs; hosts
  build it from whatever request object their framework provides.
* ``RejectionRecord`` is the structured body of a rejection log line.  Its
  JSON keys (``user-agent``, ``ip``, ``host``, ``uri``) are fixed.
"""
from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Verdict
# ---------------------------------------------------------------------------

FORBIDDEN = 403


class Verdict(enum.StrEnum):
    """Outcome of evaluating one request."""

    FORWARD = "forward"
    REJECT_NO_USER_AGENT = "reject_no_user_agent"
    REJECT_UNSUPPORTED_BROWSER = "reject_unsupported_browser"
    REJECT_UNSUPPORTED_OS = "reject_unsupported_os"

    @property
    def is_rejection(self) -> bool:
        return self is not Verdict.FORWARD

    @property
    def reason(self) -> str:
        """Human-readable reason used in rejection log lines."""
        return _REASONS[self]

    @property
    def http_status(self) -> int | None:
        """Status written for a rejection; ``None`` when forwarding."""
        return FORBIDDEN if self.is_rejection else None


_REASONS: dict[Verdict, str] = {
    Verdict.FORWARD: "",
    Verdict.REJECT_NO_USER_AGENT: "No User-Agent",
    Verdict.REJECT_UNSUPPORTED_BROWSER: "Unsupported Browser",
    Verdict.REJECT_UNSUPPORTED_OS: "Unsupported OS",
}


# ---------------------------------------------------------------------------
# Request / response shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HTTPRequest:
    """The parts of an inbound request the filter looks at.

    Attributes
    ----------
    user_agent:
        Raw ``User-Agent`` header value; empty when the header is absent.
    remote_addr:
        Client address, conventionally ``host:port``.
    host:
        Value of the ``Host`` header.
    request_uri:
        Path plus query string as sent by the client.
    """

    user_agent: str = ""
    remote_addr: str = ""
    host: str = ""
    request_uri: str = ""


HTTPResponse = tuple[int, dict[str, str], str]
"""``(status_code, headers, body)`` as returned by handlers."""

HTTPHandler = Callable[[HTTPRequest], Awaitable[HTTPResponse]]
"""The next stage of the host's request pipeline."""


# ---------------------------------------------------------------------------
# Rejection log record
# ---------------------------------------------------------------------------

class RejectionRecord(BaseModel):
    """Identity of a rejected request, serialised into the log line."""

    model_config = ConfigDict(frozen=True)

    user_agent: str = Field(serialization_alias="user-agent")
    remote_addr: str = Field(serialization_alias="ip")
    host: str
    request_uri: str = Field(serialization_alias="uri")

    @classmethod
    def from_request(cls, request: HTTPRequest) -> RejectionRecord:
        return cls(
            user_agent=request.user_agent or "",
            remote_addr=request.remote_addr,
            host=request.host,
            request_uri=request.request_uri,
        )

    def to_json(self) -> str:
        """Serialise with the wire keys (``user-agent``, ``ip``, ``host``, ``uri``)."""
        return self.model_dump_json(by_alias=True)
