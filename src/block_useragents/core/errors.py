"""Error-code hierarchy for the User-Agent filter.

Hierarchy
---------
::

    UserAgentFilterError
    +-- ConfigurationError   (UA-E1xx)  fatal, raised while constructing a filter
    +-- RequestError         (UA-E2xx)  raised per request, before any matching

Policy rejections (missing header, unsupported browser, unsupported OS) are
*not* errors.  They are ordinary :class:`~block_useragents.core.types.Verdict`
values returned by the evaluator.

Usage
-----
Catch by category::

    try:
        gate = create_filter(config, app)
    except ConfigurationError as exc:
        # NoAllowedBrowsers, InvalidBrowserPattern, InvalidOSPattern, ...
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class UserAgentFilterError(Exception):
    """Base exception for all filter errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"UA-E100"``.
    http_status : int
        HTTP status a host should answer with when this error escapes.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for whoever owns the configuration or request.
    """

    code: str = "UA-E000"
    http_status: int = 500
    message: str = "Unknown User-Agent filter error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a JSON-friendly mapping."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class ConfigurationError(UserAgentFilterError):
    """UA-E1xx -- The filter configuration is unusable.

    Always fatal: the filter instance is never created.
    """

    code = "UA-E1XX"
    http_status = 500


class RequestError(UserAgentFilterError):
    """UA-E2xx -- The request handed to the filter is unusable."""

    code = "UA-E2XX"
    http_status = 400


# ===================================================================
# UA-E1xx  Configuration Errors
# ===================================================================

class NoAllowedBrowsers(ConfigurationError):
    """UA-E100 -- The browser allow-list is empty."""

    code = "UA-E100"
    message = "At least one allowed browser must be specified"
    resolution = (
        "Add at least one entry to allowedBrowsers. An empty list would "
        "reject every request."
    )


class BrowserRuleIncomplete(ConfigurationError):
    """UA-E101 -- A browser rule has neither a pattern nor a version threshold."""

    code = "UA-E101"
    message = "Browser rule has neither a pattern nor a version threshold"
    resolution = "Set either 'pattern' or 'versionThreshold' on the rule."


class InvalidBrowserPattern(ConfigurationError):
    """UA-E102 -- A browser pattern failed to compile."""

    code = "UA-E102"
    message = "Browser pattern is not a valid regular expression"
    resolution = "Fix the regular expression syntax of the browser rule."


class InvalidOSPattern(ConfigurationError):
    """UA-E103 -- An OS pattern failed to compile."""

    code = "UA-E103"
    message = "OS pattern is not a valid regular expression"
    resolution = "Fix the regular expression syntax in allowedOSTypes."


class InvalidVersionThreshold(ConfigurationError):
    """UA-E104 -- A version threshold cannot be turned into a matcher."""

    code = "UA-E104"
    message = "Version threshold is not usable"
    resolution = (
        "Use a dotted numeric version after '>' (e.g. '>121' or '>17.4') "
        "and give the rule a non-empty browser name."
    )


class ConfigLoadError(ConfigurationError):
    """UA-E105 -- The configuration could not be read or has the wrong shape."""

    code = "UA-E105"
    message = "Configuration could not be loaded"
    resolution = (
        "Check that the file exists, is valid YAML or JSON, and matches "
        "the allowedBrowsers / allowedOSTypes schema."
    )


# ===================================================================
# UA-E2xx  Request Errors
# ===================================================================

class MalformedRequest(RequestError):
    """UA-E200 -- The request object is absent or not a request."""

    code = "UA-E200"
    http_status = 400
    message = "Malformed request"
    resolution = "The host must pass a request object to the filter."
