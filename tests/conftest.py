"""
Pytest configuration and shared fixtures for chatfilter tests.

Testing Standards:
- Unit tests go in tests/unit/, integration tests in tests/integration/
- Build stores and services from InMemoryWordListSource unless the test
  is about reading files
"""

from collections.abc import Callable

import pytest

from chatfilter.application.services.message_filter_service import MessageFilterService
from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.application.services.word_matcher import WordMatcher
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.infrastructure.stubs.word_list_source_stub import InMemoryWordListSource

ServiceFactory = Callable[..., MessageFilterService]


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from chatfilter import __version__

    return __version__


@pytest.fixture
def word_source() -> InMemoryWordListSource:
    """Source with one mild word and nothing else configured."""
    return InMemoryWordListSource(words={WordCategory.MILD: ("darn",)})


@pytest.fixture
def make_service() -> ServiceFactory:
    """Factory building a loaded MessageFilterService from in-memory lists."""

    def _make(
        words: dict[WordCategory, tuple[str, ...]] | None = None,
        patterns: dict[WordCategory, tuple[str, ...]] | None = None,
        whitelist: tuple[str, ...] = (),
        **service_kwargs: object,
    ) -> MessageFilterService:
        source = InMemoryWordListSource(
            words=words, patterns=patterns, whitelist=whitelist
        )
        store = WordListStore(source)
        service = MessageFilterService(
            store=store,
            matcher=WordMatcher(store),
            **service_kwargs,
        )
        service.reload()
        return service

    return _make
