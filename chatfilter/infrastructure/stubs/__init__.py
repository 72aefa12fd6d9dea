"""In-memory stubs for testing."""

from chatfilter.infrastructure.stubs.word_list_source_stub import (
    FailingWordListSourceStub,
    InMemoryWordListSource,
)

__all__: list[str] = ["FailingWordListSourceStub", "InMemoryWordListSource"]
