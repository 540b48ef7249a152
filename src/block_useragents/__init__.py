"""block-useragents -- User-Agent allow-list filter for HTTP services.

Every request is blocked unless its ``User-Agent`` matches a configured
browser rule and, when an OS allow-list is configured, an OS pattern.

Layers
------
1. Configuration (:mod:`block_useragents.core.config`)
2. Pattern compilation (:mod:`block_useragents.matching`)
3. Request evaluation (:mod:`block_useragents.evaluator`)
4. Host boundary (:mod:`block_useragents.filter`, :mod:`block_useragents.wire`)
"""
from __future__ import annotations

__version__ = "1.0.0a1"

from block_useragents.core.config import BrowserRule, FilterConfig, load_config
from block_useragents.core.errors import (
    BrowserRuleIncomplete,
    ConfigLoadError,
    ConfigurationError,
    InvalidBrowserPattern,
    InvalidOSPattern,
    InvalidVersionThreshold,
    MalformedRequest,
    NoAllowedBrowsers,
    RequestError,
    UserAgentFilterError,
)
from block_useragents.core.interfaces import (
    BlockedRequestLogger,
    InMemoryBlockedRequestLogger,
    LoggingBlockedRequestLogger,
)
from block_useragents.core.types import (
    HTTPHandler,
    HTTPRequest,
    HTTPResponse,
    RejectionRecord,
    Verdict,
)
from block_useragents.evaluator import RequestEvaluator
from block_useragents.filter import UserAgentFilter, build_evaluator, create_filter
from block_useragents.matching import CompiledMatcherSet, compile_matchers
from block_useragents.wire import BlockUserAgentsMiddleware

__all__ = [
    "BlockUserAgentsMiddleware",
    "BlockedRequestLogger",
    "BrowserRule",
    "BrowserRuleIncomplete",
    "CompiledMatcherSet",
    "ConfigLoadError",
    "ConfigurationError",
    "FilterConfig",
    "HTTPHandler",
    "HTTPRequest",
    "HTTPResponse",
    "InMemoryBlockedRequestLogger",
    "InvalidBrowserPattern",
    "InvalidOSPattern",
    "InvalidVersionThreshold",
    "LoggingBlockedRequestLogger",
    "MalformedRequest",
    "NoAllowedBrowsers",
    "RejectionRecord",
    "RequestError",
    "RequestEvaluator",
    "UserAgentFilter",
    "UserAgentFilterError",
    "Verdict",
    "__version__",
    "build_evaluator",
    "compile_matchers",
    "create_filter",
    "load_config",
]
