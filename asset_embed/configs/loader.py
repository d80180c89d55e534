"""Generation request model and config loading.

A ``GenerationRequest`` is built once per run, from command-line flags
optionally layered over a YAML config file, and then passed explicitly
through the pipeline.  Nothing reads configuration from global state.

YAML keys mirror the command-line flags::

    pkg: assets
    var: Files
    out: assets/files.go
    base: web
    gzip: true
    verbose: false
    patterns:
      - "*.html"
      - "static/*.css"

Usage::

    from asset_embed.configs.loader import load_config_file, load_request
    values = {**load_config_file("embed.yaml"), "verbose": True}
    request = load_request(values)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from asset_embed.errors import ConfigError
from asset_embed.utils.fs import load_yaml

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("pkg", "var", "out")


class GenerationRequest(BaseModel):
    """Validated configuration of one generation run.

    Field aliases are the flag / YAML key names (``pkg``, ``var``, ...);
    Python attribute names are used everywhere else.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    package_name: str = Field(..., alias="pkg", description="Go package name")
    variable_name: str = Field(..., alias="var", description="Go map variable name")
    output_path: str = Field(..., alias="out", description="Generated file path")
    base_directory: str = Field(".", alias="base", description="Root patterns are resolved against")
    patterns: List[str] = Field(..., min_length=1, description="Glob patterns, in order")
    compress: bool = Field(False, alias="gzip", description="Idempotent gzip of each asset")
    verbose: bool = Field(False, description="Emit progress diagnostics")

    @field_validator('package_name', 'variable_name', 'output_path')
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator('base_directory')
    @classmethod
    def validate_base(cls, v: str) -> str:
        return v or "."


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Load a YAML config file into a flag-keyed dict.

    Raises
    ------
    ConfigError
        If the file is missing, unparsable or not a mapping.
    """
    data = load_yaml(path)
    logger.debug("Loaded config file %s (%d keys)", path, len(data))
    return data


def merge_values(
    file_values: dict[str, Any],
    cli_values: dict[str, Any],
) -> dict[str, Any]:
    """Layer command-line values over config-file values.

    ``None`` command-line values (flag not given) and an empty positional
    pattern list leave the file value in place.
    """
    merged = dict(file_values)
    for key, value in cli_values.items():
        if value is None:
            continue
        if key == "patterns" and not value:
            continue
        merged[key] = value
    return merged


def missing_keys(values: dict[str, Any]) -> list[str]:
    """Return the required keys that are unset or empty in ``values``.

    ``patterns`` is reported when no pattern is given at all.
    """
    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if not values.get("patterns"):
        missing.append("patterns")
    return missing


def load_request(values: dict[str, Any]) -> GenerationRequest:
    """Validate flag-keyed ``values`` into a ``GenerationRequest``.

    Raises
    ------
    ConfigError
        If validation fails (wrong types, unknown keys, blank values).
    """
    try:
        return GenerationRequest(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid generation request: {e}") from e
    except TypeError as e:
        # Non-string keys from a hand-written YAML mapping
        raise ConfigError(f"Invalid generation request: {e}") from e


def describe(request: GenerationRequest, config_path: Optional[str] = None) -> str:
    """One-line summary of ``request`` for the progress log."""
    source = f" (config {config_path})" if config_path else ""
    return (
        f"package={request.package_name} var={request.variable_name} "
        f"out={request.output_path} base={request.base_directory} "
        f"patterns={len(request.patterns)} gzip={request.compress}{source}"
    )
