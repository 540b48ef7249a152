"""Pattern compiler.

Turns a :class:`~block_useragents.core.config.FilterConfig` into a
:class:`CompiledMatcherSet`.  Any problem with the configuration raises a
:class:`~block_useragents.core.errors.ConfigurationError` so that a filter
never starts half-configured.

Per browser rule, in order:

1. ``pattern`` set -> :class:`DirectPattern` from the explicit regex.
2. ``version_threshold`` starting with ``>`` -> :class:`VersionThreshold`.
3. other ``version_threshold`` -> :class:`DirectPattern` matching the exact
   version prefix plus optional ``.N`` sub-versions.
4. neither -> :class:`BrowserRuleIncomplete`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from block_useragents.core.config import BrowserRule, FilterConfig
from block_useragents.core.errors import (
    BrowserRuleIncomplete,
    InvalidBrowserPattern,
    InvalidOSPattern,
    InvalidVersionThreshold,
    NoAllowedBrowsers,
)
from block_useragents.matching.matchers import (
    BrowserMatcher,
    CompiledOSPattern,
    DirectPattern,
    VersionThreshold,
)
from block_useragents.matching.regex_engine import PatternSyntaxError, RegexEngine
from block_useragents.matching.versions import (
    exact_prefix_pattern,
    is_numeric_version,
    version_extractor_pattern,
)

logger = logging.getLogger(__name__)

GREATER_THAN = ">"


@dataclass(frozen=True, slots=True)
class CompiledMatcherSet:
    """Ready-to-evaluate matchers.  Never mutated after compilation."""

    browsers: tuple[BrowserMatcher, ...]
    os_patterns: tuple[CompiledOSPattern, ...]
    engine_name: str = "re (stdlib)"


def compile_matchers(config: FilterConfig) -> CompiledMatcherSet:
    """Validate *config* and compile its browser rules and OS patterns.

    Raises
    ------
    NoAllowedBrowsers
        If the browser allow-list is empty.
    BrowserRuleIncomplete
        If a rule has neither a pattern nor a version threshold.
    InvalidVersionThreshold
        If a ``>`` threshold is not a dotted numeric version, or the rule
        has no name to anchor the version on.
    InvalidBrowserPattern / InvalidOSPattern
        If a pattern does not compile.
    """
    if not config.allowed_browsers:
        raise NoAllowedBrowsers()

    engine = RegexEngine(prefer_re2=config.prefer_re2)
    browsers = tuple(
        _compile_browser_rule(engine, index, rule)
        for index, rule in enumerate(config.allowed_browsers)
    )
    os_patterns = tuple(
        _compile_os_pattern(engine, pattern) for pattern in config.allowed_os_types
    )

    logger.debug(
        "compiled %d browser matcher(s) and %d OS pattern(s) with %s",
        len(browsers),
        len(os_patterns),
        engine.engine_name,
    )
    return CompiledMatcherSet(
        browsers=browsers,
        os_patterns=os_patterns,
        engine_name=engine.engine_name,
    )


def _compile_browser_rule(
    engine: RegexEngine, index: int, rule: BrowserRule
) -> BrowserMatcher:
    rule_details = {"index": index, "name": rule.name}

    if rule.pattern:
        return DirectPattern(
            label=rule.name,
            source=rule.pattern,
            regex=_compile_browser_pattern(engine, rule.pattern, rule_details),
        )

    threshold = rule.version_threshold
    if not threshold:
        raise BrowserRuleIncomplete(
            f"Browser rule #{index} ({rule.name!r}) has neither a pattern "
            "nor a version threshold",
            details=rule_details,
        )

    if not rule.name:
        raise InvalidVersionThreshold(
            f"Browser rule #{index} uses version threshold {threshold!r} "
            "but has no name",
            details={**rule_details, "version_threshold": threshold},
        )

    if threshold.startswith(GREATER_THAN):
        value = threshold[len(GREATER_THAN):].strip()
        if not is_numeric_version(value):
            raise InvalidVersionThreshold(
                f"Browser rule #{index} ({rule.name!r}) has a non-numeric "
                f"version threshold {threshold!r}",
                details={**rule_details, "version_threshold": threshold},
            )
        extractor = version_extractor_pattern(rule.name)
        return VersionThreshold(
            name=rule.name,
            threshold=value,
            extractor=_compile_browser_pattern(engine, extractor, rule_details),
        )

    source = exact_prefix_pattern(rule.name, threshold)
    return DirectPattern(
        label=rule.name,
        source=source,
        regex=_compile_browser_pattern(engine, source, rule_details),
    )


def _compile_browser_pattern(
    engine: RegexEngine, pattern: str, rule_details: dict[str, object]
) -> object:
    try:
        return engine.compile(pattern)
    except PatternSyntaxError as exc:
        raise InvalidBrowserPattern(
            f"Error compiling browser regex for {rule_details['name']!r}: "
            f"{exc.reason}",
            details={**rule_details, "pattern": pattern, "reason": exc.reason},
        ) from exc


def _compile_os_pattern(engine: RegexEngine, pattern: str) -> CompiledOSPattern:
    try:
        regex = engine.compile(pattern)
    except PatternSyntaxError as exc:
        raise InvalidOSPattern(
            f"Error compiling OS regex {pattern!r}: {exc.reason}",
            details={"pattern": pattern, "reason": exc.reason},
        ) from exc
    return CompiledOSPattern(source=pattern, regex=regex)
