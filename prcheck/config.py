"""Review configuration.

Settings are layered, later layers winning:

1. Defaults from ``prcheck.constants``
2. An optional JSON file (``.prcheck.json`` in the working directory, or an
   explicit ``--config`` path)
3. Environment variables, as set by CI runners
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from prcheck.analysis.consistency import ReturnTagPolicy
from prcheck.constants import (
    DEFAULT_BASE_REF,
    EXCLUDED_SUFFIXES,
    MAX_REVIEW_COMMENTS,
    NEAR_CHANGE_MARGIN,
    SOURCE_EXTENSIONS,
    STYLE_EXTENSIONS,
)
from prcheck.types import ConfigurationError, ErrorCode, ErrorContext, RecoveryAction
from prcheck.utils.logger import logger

DEFAULT_CONFIG_FILE = ".prcheck.json"
DEFAULT_API_URL = "https://api.github.com"

# Environment variable -> config field
ENV_FIELDS: dict[str, str] = {
    "BASE_REF": "base_ref",
    "GITHUB_TOKEN": "github_token",
    "GITHUB_REPOSITORY": "repository",
    "PR_NUMBER": "pull_number",
    "GITHUB_API_URL": "api_url",
    "PRCHECK_NEAR_MARGIN": "near_change_margin",
    "PRCHECK_RETURN_TAG_POLICY": "return_tag_policy",
}


@dataclass
class ReviewConfig:
    """Settings for a review run."""

    # Comparison
    base_ref: str = DEFAULT_BASE_REF
    near_change_margin: int = NEAR_CHANGE_MARGIN
    return_tag_policy: ReturnTagPolicy = ReturnTagPolicy.REQUIRE

    # File selection
    source_extensions: tuple[str, ...] = SOURCE_EXTENSIONS
    excluded_suffixes: tuple[str, ...] = EXCLUDED_SUFFIXES
    style_extensions: tuple[str, ...] = STYLE_EXTENSIONS

    # Review publishing
    max_review_comments: int = MAX_REVIEW_COMMENTS
    github_token: Optional[str] = field(default=None, repr=False)
    repository: Optional[str] = None  # "owner/name"
    pull_number: Optional[int] = None
    api_url: str = DEFAULT_API_URL

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, token redacted."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["return_tag_policy"] = self.return_tag_policy.value
        data["github_token"] = "***" if self.github_token else None
        return data


def _invalid(name: str, value: Any, reason: str, source: str) -> ConfigurationError:
    return ConfigurationError(
        f"Invalid value for {name} from {source}: {value!r} ({reason})",
        user_message=f"Configuration value '{name}' is invalid: {reason}.",
        context=ErrorContext(operation="load_config", component="config", additional_info={"source": source}),
        recovery_actions=[RecoveryAction(f"Fix '{name}' in {source}")],
    )


def _coerce(name: str, value: Any, source: str) -> Any:
    """Convert a raw file or environment value to the field's type."""
    if name in ("near_change_margin", "max_review_comments", "pull_number"):
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise _invalid(name, value, "expected an integer", source) from e
        if number < 0 or (name != "near_change_margin" and number == 0):
            raise _invalid(name, value, "must be positive", source)
        return number

    if name == "return_tag_policy":
        try:
            return ReturnTagPolicy(value)
        except ValueError as e:
            choices = ", ".join(p.value for p in ReturnTagPolicy)
            raise _invalid(name, value, f"expected one of {choices}", source) from e

    if name in ("source_extensions", "excluded_suffixes", "style_extensions"):
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise _invalid(name, value, "expected a list of strings", source)
        return tuple(value)

    if not isinstance(value, str) or not value:
        raise _invalid(name, value, "expected a non-empty string", source)
    return value


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Config file {path} is not valid JSON: {e}",
            user_message=f"Could not parse {path}.",
            context=ErrorContext(operation="load_config", file_path=str(path), component="config"),
            original_error=e,
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Config file {path} could not be read: {e}",
            user_message=f"Could not read {path}.",
            context=ErrorContext(operation="load_config", file_path=str(path), component="config"),
            original_error=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a JSON object",
            user_message=f"{path} must contain a JSON object.",
        )
    return data


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ReviewConfig:
    """Build a ReviewConfig from defaults, an optional file and the environment.

    Args:
        path: Explicit config file. Must exist when given. When omitted,
            ``.prcheck.json`` is used if present.
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        The merged configuration

    Raises:
        ConfigurationError: The file is unreadable, or any value is invalid
    """
    env = os.environ if env is None else env
    config = ReviewConfig()
    known = {f.name for f in fields(ReviewConfig)}

    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(
                f"Config file not found: {config_path}",
                user_message=f"Config file {config_path} does not exist.",
                code=ErrorCode.MISSING_CONFIG,
                context=ErrorContext(operation="load_config", file_path=str(config_path), component="config"),
            )
    else:
        config_path = Path(DEFAULT_CONFIG_FILE)

    if config_path.is_file():
        source = str(config_path)
        for key, value in _read_config_file(config_path).items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key '{key}' in {source}")
                continue
            setattr(config, key, _coerce(key, value, source))
        logger.debug(f"Loaded config file {source}")

    for variable, name in ENV_FIELDS.items():
        value = env.get(variable)
        if value:
            setattr(config, name, _coerce(name, value, f"${variable}"))

    return config


def missing_publish_settings(config: ReviewConfig) -> list[str]:
    """Names of the settings still needed to post a review."""
    missing = []
    if not config.github_token:
        missing.append("GITHUB_TOKEN")
    if not config.repository:
        missing.append("GITHUB_REPOSITORY")
    if config.pull_number is None:
        missing.append("PR_NUMBER")
    return missing

