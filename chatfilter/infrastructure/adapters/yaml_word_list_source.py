"""YAML word list source.

Layout on disk:

    <word_lists_dir>/slurs.yml
    <word_lists_dir>/extreme.yml
    <word_lists_dir>/moderate.yml
    <word_lists_dir>/mild.yml

Each category file:

    words:
      - darn
      - heck
    patterns:
      - "b+a+d+"

The whitelist lives in the general settings file:

    whitelist:
      - scunthorpe
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from chatfilter.application.ports.word_list_source import RawCategoryList
from chatfilter.domain.errors.word_list import WordListSourceError
from chatfilter.domain.models.word_category import WordCategory

logger = structlog.get_logger(__name__)

WORD_LIST_SUFFIX = ".yml"


class YamlWordListSource:
    """Reads word lists from per-category YAML files.

    Attributes:
        _word_lists_dir: Directory holding ``<category>.yml`` files.
        _settings_path: General settings file holding the whitelist.
    """

    def __init__(self, word_lists_dir: Path | str, settings_path: Path | str) -> None:
        """Initialize the source.

        Args:
            word_lists_dir: Directory holding the category files.
            settings_path: YAML file with the ``whitelist`` list.
        """
        self._word_lists_dir = Path(word_lists_dir)
        self._settings_path = Path(settings_path)
        self._log = logger.bind(component="yaml_word_list_source")

    def category_path(self, category: WordCategory) -> Path:
        """Path of the file holding ``category``'s lists."""
        return self._word_lists_dir / f"{category.value}{WORD_LIST_SUFFIX}"

    def read_category(self, category: WordCategory) -> RawCategoryList:
        """Read one category file.

        A missing file loads as empty lists.

        Raises:
            WordListSourceError: If the file is unreadable or malformed.
        """
        path = self.category_path(category)
        document = self._read_document(path)
        if document is None:
            return RawCategoryList()
        return RawCategoryList(
            words=_string_list(document, "words", path),
            patterns=_string_list(document, "patterns", path),
        )

    def read_whitelist(self) -> tuple[str, ...]:
        """Read the ``whitelist`` list from the settings file.

        Raises:
            WordListSourceError: If the settings file is unreadable or malformed.
        """
        document = self._read_document(self._settings_path)
        if document is None:
            return ()
        return _string_list(document, "whitelist", self._settings_path)

    def _read_document(self, path: Path) -> dict[str, Any] | None:
        """Parse a YAML mapping, or None if the file does not exist."""
        if not path.exists():
            self._log.warning("word_list_file_missing", path=str(path))
            return None

        try:
            with open(path, encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except OSError as exc:
            raise WordListSourceError(str(path), f"cannot read file: {exc}") from exc
        except yaml.YAMLError as exc:
            raise WordListSourceError(str(path), f"invalid YAML: {exc}") from exc

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise WordListSourceError(
                str(path), f"expected a mapping, got {type(document).__name__}"
            )
        return document


def _string_list(document: dict[str, Any], key: str, path: Path) -> tuple[str, ...]:
    """Read ``document[key]`` as a list of strings (missing or null is empty)."""
    value = document.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise WordListSourceError(
            str(path), f"'{key}' must be a list, got {type(value).__name__}"
        )
    return tuple(str(item) for item in value if item is not None)
