"""Adapters implementing application ports."""

from chatfilter.infrastructure.adapters.yaml_word_list_source import (
    YamlWordListSource,
)

__all__: list[str] = ["YamlWordListSource"]
