"""Pattern compilation and matching.

* **compile_matchers** / **CompiledMatcherSet** -- validate a filter
  configuration and compile it once into immutable matchers.
* **DirectPattern** / **VersionThreshold** -- the two browser matcher kinds,
  dispatched by **browser_matches**.
* **RegexEngine** -- google-re2 when installed, stdlib ``re`` otherwise.
* **version_greater_than** -- component-wise numeric version comparison.
"""
from __future__ import annotations

from block_useragents.matching.compiler import CompiledMatcherSet, compile_matchers
from block_useragents.matching.matchers import (
    BrowserMatcher,
    CompiledOSPattern,
    DirectPattern,
    VersionThreshold,
    browser_matches,
    os_matches,
)
from block_useragents.matching.regex_engine import PatternSyntaxError, RegexEngine
from block_useragents.matching.versions import (
    exact_prefix_pattern,
    extract_version,
    version_extractor_pattern,
    version_greater_than,
)

__all__ = [
    "BrowserMatcher",
    "CompiledMatcherSet",
    "CompiledOSPattern",
    "DirectPattern",
    "PatternSyntaxError",
    "RegexEngine",
    "VersionThreshold",
    "browser_matches",
    "compile_matchers",
    "exact_prefix_pattern",
    "extract_version",
    "os_matches",
    "version_extractor_pattern",
    "version_greater_than",
]
