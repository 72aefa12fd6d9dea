"""Domain services for chatfilter (pure, stateless transforms)."""

from chatfilter.domain.services.normalization import (
    Normalizer,
    is_index_aligned,
    lowercase_aligned,
    normalize,
    normalize_for_display,
    normalize_words,
)

__all__: list[str] = [
    "Normalizer",
    "is_index_aligned",
    "lowercase_aligned",
    "normalize",
    "normalize_for_display",
    "normalize_words",
]
