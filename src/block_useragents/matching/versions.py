"""Browser version extraction and numeric comparison.

Version strings come straight out of the ``User-Agent`` header, so every
function here treats its input as untrusted: malformed versions make the
comparison fail closed (``False``) instead of raising.
"""
from __future__ import annotations

import re
from typing import Any

_VERSION_RE = re.compile(r"^[0-9]+(?:\.[0-9]+)*$")


def version_extractor_pattern(browser: str) -> str:
    """Return the pattern capturing the version that follows ``<browser>/``.

    The browser name is matched literally; the captured group is the run
    of digits and dots after the slash.
    """
    return re.escape(browser) + r"/([0-9.]+)"


def exact_prefix_pattern(browser: str, version: str) -> str:
    """Return the pattern for an exact version prefix.

    ``exact_prefix_pattern("Chrome", "121")`` matches ``Chrome/121``,
    ``Chrome/121.0`` and ``Chrome/121.5.2``.
    """
    return rf"{re.escape(browser)}/{re.escape(version)}(\.\d+)*"


def is_numeric_version(value: str) -> bool:
    """Return ``True`` for dotted numeric versions such as ``"121"`` or ``"17.4.1"``."""
    return _VERSION_RE.match(value) is not None


def extract_version(user_agent: str, extractor: Any) -> str | None:
    """Return the first version captured by *extractor* in *user_agent*.

    *extractor* is a compiled pattern built from
    :func:`version_extractor_pattern`.  Returns ``None`` when the browser
    token does not occur.
    """
    found = extractor.search(user_agent)
    if found is None:
        return None
    return found.group(1)


def _to_int(component: str) -> int | None:
    if not component.isascii() or not component.isdigit():
        return None
    return int(component)


def version_greater_than(version: str, threshold: str) -> bool:
    """Return ``True`` if *version* is strictly greater than *threshold*.

    Both are split on ``.``; the shorter one is padded with ``0`` on the
    right and components are compared as integers left to right.  Equal
    versions are not greater.  Any non-numeric component, including an
    empty one (``"123."``), makes the result ``False``.
    """
    left = version.split(".")
    right = threshold.split(".")
    width = max(len(left), len(right))
    left += ["0"] * (width - len(left))
    right += ["0"] * (width - len(right))

    left_nums = [_to_int(part) for part in left]
    right_nums = [_to_int(part) for part in right]
    if None in left_nums or None in right_nums:
        return False

    for x, y in zip(left_nums, right_nums, strict=True):
        if x > y:  # type: ignore[operator]
            return True
        if x < y:  # type: ignore[operator]
            return False
    return False
