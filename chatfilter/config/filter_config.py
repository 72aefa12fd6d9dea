"""Chat filter configuration.

Settings come from a YAML file (``config/filter.yml`` by default), then
environment variables override individual values for deployment tuning.

Settings file keys:
- censor-character: Replacement character for censored text (default: "*")
- max-message-length: Longest message prefix scanned (default: 1024)
- default-filter-level: Level for viewers without a preference (default: STRICT)
- word-lists-dir: Directory of <category>.yml files, relative to the
  settings file (default: word-lists)
- whitelist: Whitelisted phrases (read by the word list source, not here)

Environment Variables:
- CHATFILTER_CONFIG: Path of the settings file
- CHATFILTER_CENSOR_CHAR: Overrides censor-character
- CHATFILTER_MAX_MESSAGE_LENGTH: Overrides max-message-length
- CHATFILTER_DEFAULT_LEVEL: Overrides default-filter-level
- CHATFILTER_WORD_LISTS_DIR: Overrides word-lists-dir
- ENVIRONMENT: 'production' selects JSON logs (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from chatfilter.domain.errors.configuration import FilterConfigurationError
from chatfilter.domain.models.filter_level import FilterLevel

_PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "config" / "filter.yml"

DEFAULT_CENSOR_CHAR = "*"
DEFAULT_MAX_MESSAGE_LENGTH = 1024
DEFAULT_WORD_LISTS_DIR = "word-lists"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        Parsed integer value or default.

    Raises:
        FilterConfigurationError: If the variable is set but not an integer.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise FilterConfigurationError(key, value, "must be an integer") from exc


@dataclass(frozen=True)
class FilterConfig:
    """Settings for building a MessageFilterService.

    Attributes:
        censor_char: Single character written over censored spans.
        max_message_length: Longest message prefix scanned per call.
        default_filter_level: Level for viewers with no stored preference.
        settings_path: YAML file holding settings and the whitelist.
        word_lists_dir: Directory of per-category word list files.
        environment: 'production' or 'development' (selects log format).
    """

    censor_char: str = DEFAULT_CENSOR_CHAR
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH
    default_filter_level: FilterLevel = FilterLevel.STRICT
    settings_path: Path = DEFAULT_CONFIG_PATH
    word_lists_dir: Path = field(
        default_factory=lambda: DEFAULT_CONFIG_PATH.parent / DEFAULT_WORD_LISTS_DIR
    )
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if len(self.censor_char) != 1:
            raise FilterConfigurationError(
                "censor_char", self.censor_char, "must be exactly one character"
            )
        if self.max_message_length <= 0:
            raise FilterConfigurationError(
                "max_message_length", self.max_message_length, "must be positive"
            )


def _read_settings(path: Path) -> dict[str, Any]:
    """Read the settings mapping, or {} if the file does not exist."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        try:
            settings = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise FilterConfigurationError(
                "settings file", str(path), f"invalid YAML: {exc}"
            ) from exc
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise FilterConfigurationError("settings file", str(path), "expected a mapping")
    return settings


def load_filter_config(config_path: Path | str | None = None) -> FilterConfig:
    """Load filter settings from YAML, then apply environment overrides.

    Args:
        config_path: Settings file path (CHATFILTER_CONFIG, then the
            bundled config/filter.yml if None). A missing file yields
            default settings.

    Returns:
        Validated FilterConfig.

    Raises:
        FilterConfigurationError: If a setting has an invalid value.
    """
    if config_path is None:
        config_path = os.environ.get("CHATFILTER_CONFIG") or DEFAULT_CONFIG_PATH
    path = Path(config_path)
    settings = _read_settings(path)

    censor_char = str(settings.get("censor-character", DEFAULT_CENSOR_CHAR))
    censor_char = os.environ.get("CHATFILTER_CENSOR_CHAR", censor_char)

    try:
        max_length = int(settings.get("max-message-length", DEFAULT_MAX_MESSAGE_LENGTH))
    except (TypeError, ValueError) as exc:
        raise FilterConfigurationError(
            "max-message-length",
            settings.get("max-message-length"),
            "must be an integer",
        ) from exc
    max_length = _get_int_env("CHATFILTER_MAX_MESSAGE_LENGTH", max_length)

    level_name = os.environ.get(
        "CHATFILTER_DEFAULT_LEVEL", settings.get("default-filter-level")
    )
    default_level = FilterLevel.from_string(level_name)

    word_lists_dir = Path(
        os.environ.get(
            "CHATFILTER_WORD_LISTS_DIR",
            settings.get("word-lists-dir", DEFAULT_WORD_LISTS_DIR),
        )
    )
    if not word_lists_dir.is_absolute():
        word_lists_dir = path.parent / word_lists_dir

    return FilterConfig(
        censor_char=censor_char,
        max_message_length=max_length,
        default_filter_level=default_level,
        settings_path=path,
        word_lists_dir=word_lists_dir,
        environment=os.environ.get("ENVIRONMENT", "development"),
    )
