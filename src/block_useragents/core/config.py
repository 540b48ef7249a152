"""Filter configuration.

Defines the validated configuration models consumed by the pattern compiler
and the loaders that read them from YAML or JSON files.  Keys follow the
camelCase schema used in reverse-proxy middleware configuration
(``allowedBrowsers``, ``allowedOSTypes``); the snake_case field names are
accepted as well so the models are comfortable to build from Python.
"""
from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from block_useragents.core.errors import ConfigLoadError


class BrowserRule(BaseModel):
    """One entry of the browser allow-list.

    A rule matches either through an explicit regular expression
    (``pattern``) or through a pattern generated from ``name`` and
    ``version_threshold``.  When both are set the explicit pattern wins.
    A rule with neither is rejected by the compiler.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        coerce_numbers_to_str=True,
    )

    name: str = Field(
        description=(
            "Browser label (e.g. 'Chrome').  Used in error messages and, "
            "for version thresholds, as the literal token preceding '/'."
        ),
    )
    pattern: str | None = Field(
        default=None,
        validation_alias=AliasChoices("pattern", "regex"),
        description="Explicit regular expression searched in the User-Agent.",
    )
    version_threshold: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "versionThreshold", "version_threshold", "version"
        ),
        description=(
            "'>X.Y' for a strictly-greater comparison, or 'X.Y' for an "
            "exact-prefix match that also accepts finer sub-versions."
        ),
    )


class FilterConfig(BaseModel):
    """Full filter configuration.

    Immutable once built; the compiled filter owns it for its lifetime.
    The defaults describe an empty allow-list, which the compiler rejects.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allowed_browsers: tuple[BrowserRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("allowedBrowsers", "allowed_browsers"),
        description="Browser rules; a request must match at least one.",
    )
    allowed_os_types: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("allowedOSTypes", "allowed_os_types"),
        description=(
            "OS regular expressions.  Empty means the OS is not filtered."
        ),
    )
    prefer_re2: bool = Field(
        default=True,
        validation_alias=AliasChoices("preferRe2", "prefer_re2"),
        description="Compile patterns with google-re2 when it is installed.",
    )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        source: str | None = None,
    ) -> FilterConfig:
        """Validate an already-parsed configuration mapping.

        Raises
        ------
        ConfigLoadError
            If *data* does not match the configuration schema.
        """
        details: dict[str, Any] = {}
        if source is not None:
            details["source"] = source
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            details["errors"] = [
                {"loc": list(err["loc"]), "msg": err["msg"]}
                for err in exc.errors()
            ]
            raise ConfigLoadError(
                f"Invalid filter configuration: {exc.error_count()} error(s)",
                details=details,
            ) from exc


def load_config(path: str | os.PathLike[str]) -> FilterConfig:
    """Read a YAML or JSON configuration file into a :class:`FilterConfig`.

    Files ending in ``.json`` are parsed with :mod:`json`; anything else
    goes through ``yaml.safe_load``.  An empty file yields the default
    (empty) configuration, which the compiler will then reject.

    Raises
    ------
    ConfigLoadError
        If the file cannot be read, cannot be parsed, or has the wrong shape.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(
            f"Cannot read configuration file: {config_path}",
            details={"source": str(config_path), "reason": str(exc)},
        ) from exc

    try:
        if config_path.suffix.lower() == ".json":
            data = json.loads(raw) if raw.strip() else None
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigLoadError(
            f"Cannot parse configuration file: {config_path}",
            details={"source": str(config_path), "reason": str(exc)},
        ) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Configuration file must contain a mapping: {config_path}",
            details={"source": str(config_path), "type": type(data).__name__},
        )
    return FilterConfig.from_mapping(data, source=str(config_path))
