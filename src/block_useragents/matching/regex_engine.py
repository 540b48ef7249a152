"""Regular-expression engine selection.

Patterns are compiled with ``google-re2`` when it is installed, falling
back to the standard library ``re`` module otherwise.  RE2 gives
linear-time matching, which matters because every pattern runs against an
untrusted header on every request.  Compilation happens once per filter;
nothing here runs on the request path.
"""
from __future__ import annotations

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Attempt to import google-re2; fall back to ``re`` if unavailable
# ---------------------------------------------------------------------------

_RE2_AVAILABLE = False
_re2_module: Any = None

try:
    import re2 as _re2_module  # type: ignore[no-redef]

    _RE2_AVAILABLE = True
except ImportError:
    pass


class PatternSyntaxError(ValueError):
    """Raised when a pattern does not compile under the active engine."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


def _syntax_errors() -> tuple[type[BaseException], ...]:
    if _RE2_AVAILABLE:
        return (re.error, _re2_module.error)
    return (re.error,)


class RegexEngine:
    """Compiles patterns with the preferred available engine.

    Parameters
    ----------
    prefer_re2:
        If ``True`` (the default), use ``google-re2`` when available.
    """

    def __init__(self, prefer_re2: bool = True) -> None:
        self._use_re2 = prefer_re2 and _RE2_AVAILABLE
        logger.debug("regex engine selected: %s", self.engine_name)

    @property
    def engine_name(self) -> str:
        """Return the name of the active regex engine."""
        return "google-re2" if self._use_re2 else "re (stdlib)"

    def compile(self, pattern: str) -> Any:
        """Compile *pattern*; matching is case-sensitive.

        Raises
        ------
        PatternSyntaxError
            If the pattern is syntactically invalid.
        """
        try:
            if self._use_re2:
                return _re2_module.compile(pattern)
            return re.compile(pattern)
        except _syntax_errors() as exc:
            raise PatternSyntaxError(pattern, str(exc)) from exc
