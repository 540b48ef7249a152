"""Compiled browser and OS matchers.

Browser matchers form a closed union of two kinds:

* :class:`DirectPattern` -- a regular expression searched anywhere in the
  header.  Explicit patterns and exact-prefix version rules both compile to
  this kind.
* :class:`VersionThreshold` -- extracts ``<name>/<version>`` and matches
  when the version is strictly greater than the threshold.

:func:`browser_matches` is the only place that dispatches on the kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, assert_never

from block_useragents.matching.versions import extract_version, version_greater_than


@dataclass(frozen=True, slots=True)
class DirectPattern:
    """A browser rule backed by a regular expression.

    Attributes
    ----------
    label:
        The rule's browser name, kept for diagnostics.
    source:
        The pattern text the regex was compiled from.
    regex:
        The compiled pattern.
    """

    label: str
    source: str
    regex: Any


@dataclass(frozen=True, slots=True)
class VersionThreshold:
    """A browser rule requiring ``<name>/<version>`` with version > threshold."""

    name: str
    threshold: str
    extractor: Any


BrowserMatcher = DirectPattern | VersionThreshold


@dataclass(frozen=True, slots=True)
class CompiledOSPattern:
    """An entry of the OS allow-list."""

    source: str
    regex: Any


def browser_matches(matcher: BrowserMatcher, user_agent: str) -> bool:
    """Return ``True`` if *matcher* accepts *user_agent*."""
    match matcher:
        case DirectPattern(regex=regex):
            return regex.search(user_agent) is not None
        case VersionThreshold(threshold=threshold, extractor=extractor):
            detected = extract_version(user_agent, extractor)
            if detected is None:
                return False
            return version_greater_than(detected, threshold)
        case _:
            assert_never(matcher)


def os_matches(pattern: CompiledOSPattern, user_agent: str) -> bool:
    """Return ``True`` if the OS pattern occurs anywhere in *user_agent*."""
    return pattern.regex.search(user_agent) is not None
