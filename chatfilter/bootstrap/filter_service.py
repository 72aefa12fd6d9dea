"""Bootstrap wiring for the message filter service."""

from __future__ import annotations

from chatfilter.application.ports.filter_metrics import FilterMetricsProtocol
from chatfilter.application.ports.word_list_source import WordListSourceProtocol
from chatfilter.application.services.message_filter_service import MessageFilterService
from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.application.services.word_matcher import WordMatcher
from chatfilter.config.filter_config import FilterConfig, load_filter_config
from chatfilter.infrastructure.adapters.yaml_word_list_source import YamlWordListSource


def create_filter_service(
    config: FilterConfig | None = None,
    source: WordListSourceProtocol | None = None,
    metrics: FilterMetricsProtocol | None = None,
) -> MessageFilterService:
    """Build a MessageFilterService and load its word lists.

    Args:
        config: Filter settings (loaded from the default location if None).
        source: Word list source (YAML files named by ``config`` if None).
        metrics: Optional metrics recorder.

    Returns:
        A ready-to-use service.

    Raises:
        WordListSourceError: If the initial load fails.
    """
    config = config or load_filter_config()
    if source is None:
        source = YamlWordListSource(
            word_lists_dir=config.word_lists_dir,
            settings_path=config.settings_path,
        )

    store = WordListStore(source)
    matcher = WordMatcher(store)
    service = MessageFilterService(
        store=store,
        matcher=matcher,
        censor_char=config.censor_char,
        max_message_length=config.max_message_length,
        default_level=config.default_filter_level,
        metrics=metrics,
    )
    service.reload()
    return service
