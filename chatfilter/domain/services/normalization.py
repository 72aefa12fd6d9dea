"""Text normalization for evasion-resistant matching.

Chat users dodge naive substring checks with look-alike letters, leet
speak, separators between letters, stretched letters and stacked combining
marks. This module folds all of those back to a canonical form.

Two forms are produced:

- ``normalize_for_display``: lowercase, zalgo stripped, homoglyphs and
  leet folded. Separators and repeated letters are kept, so for most
  (Latin) input the result lines up index-for-index with the original.
- ``normalize``: the display form, then runs of one character collapsed
  to at most two and every separator removed.

The steps run in a fixed order; ``@`` and ``$`` are leet-folded to letters
before separator stripping, so ``p@$$w0rd`` becomes ``password`` rather
than ``pwrd``.

Usage:
    from chatfilter.domain.services.normalization import normalize

    normalize("H3...LLL0")  # "hello"
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

# Combining diacritical marks plus the combining cyrillic millions sign,
# the usual building blocks of zalgo text.
_ZALGO_PATTERN: Final = re.compile("[\u0300-\u036f\u0489]")

_SEPARATOR_CHARS: Final = ".-_*#@!$%^&()+=[]{}|\\:;\"'<>,?/~`"
SEPARATOR_CLASS: Final = r"[.\-_*#@!$%^&()+=\[\]{}|\\:;\"'<>,?/~`\s]"
_SEPARATOR_PATTERN: Final = re.compile(SEPARATOR_CLASS + "+")

_REPEAT_PATTERN: Final = re.compile(r"(.)\1{2,}", re.DOTALL)

LEET_MAP: Final[dict[str, str]] = {
    "@": "a",
    "4": "a",
    "8": "b",
    "3": "e",
    "1": "i",
    "!": "i",
    "|": "i",
    "0": "o",
    "5": "s",
    "$": "s",
    "7": "t",
    "+": "t",
    "2": "z",
    "9": "g",
    "6": "g",
}

HOMOGLYPH_MAP: Final[dict[str, str]] = {
    # Cyrillic
    "\u0430": "a",  # а
    "\u0435": "e",  # е
    "\u0456": "i",  # і
    "\u043e": "o",  # о
    "\u0440": "p",  # р
    "\u0441": "c",  # с
    "\u0443": "y",  # у
    "\u0445": "x",  # х
    "\u0410": "a",  # А
    "\u0412": "b",  # В
    "\u0415": "e",  # Е
    "\u041a": "k",  # К
    "\u041c": "m",  # М
    "\u041d": "h",  # Н
    "\u041e": "o",  # О
    "\u0420": "p",  # Р
    "\u0421": "c",  # С
    "\u0422": "t",  # Т
    "\u0425": "x",  # Х
    # Greek
    "\u03b1": "a",  # α
    "\u03b5": "e",  # ε
    "\u03b9": "i",  # ι
    "\u03bf": "o",  # ο
    "\u03c1": "p",  # ρ
    "\u03c5": "u",  # υ
    # Accented Latin
    "\u00e0": "a",  # à
    "\u00e1": "a",  # á
    "\u00e2": "a",  # â
    "\u00e3": "a",  # ã
    "\u00e4": "a",  # ä
    "\u00e8": "e",  # è
    "\u00e9": "e",  # é
    "\u00ea": "e",  # ê
    "\u00eb": "e",  # ë
    "\u00ec": "i",  # ì
    "\u00ed": "i",  # í
    "\u00ee": "i",  # î
    "\u00ef": "i",  # ï
    "\u00f2": "o",  # ò
    "\u00f3": "o",  # ó
    "\u00f4": "o",  # ô
    "\u00f5": "o",  # õ
    "\u00f6": "o",  # ö
    "\u00f9": "u",  # ù
    "\u00fa": "u",  # ú
    "\u00fb": "u",  # û
    "\u00fc": "u",  # ü
}

_HOMOGLYPH_TABLE: Final = str.maketrans(HOMOGLYPH_MAP)
_LEET_TABLE: Final = str.maketrans(LEET_MAP)


def strip_zalgo(text: str) -> str:
    """Decompose to NFD and drop combining marks."""
    return _ZALGO_PATTERN.sub("", unicodedata.normalize("NFD", text))


def fold_homoglyphs(text: str) -> str:
    """Replace look-alike Cyrillic, Greek and accented letters with ASCII."""
    return text.translate(_HOMOGLYPH_TABLE)


def fold_leet(text: str) -> str:
    """Replace leet-speak digits and symbols with the letters they stand for."""
    return text.translate(_LEET_TABLE)


def collapse_repeats(text: str, limit: int = 2) -> str:
    """Collapse runs of one character to at most ``limit`` copies.

    Genuine double letters ("book", "class") survive; stretching
    ("baaaaad") does not.

    Args:
        text: Text to collapse.
        limit: Maximum run length kept. Only 2 uses the precompiled pattern.

    Returns:
        Collapsed text.
    """
    if len(text) <= limit:
        return text
    if limit == 2:
        return _REPEAT_PATTERN.sub(r"\1\1", text)
    pattern = re.compile(r"(.)\1{%d,}" % limit, re.DOTALL)
    return pattern.sub(lambda m: m.group(1) * limit, text)


def strip_separators(text: str) -> str:
    """Remove punctuation separators and all whitespace."""
    return _SEPARATOR_PATTERN.sub("", text)


def normalize_for_display(text: str | None) -> str:
    """Lowercase, strip zalgo, fold homoglyphs and leet speak.

    Separators and repeated characters are preserved, which keeps the
    result close to the original message for locating matches.

    Args:
        text: Raw text. ``None`` is treated as empty.

    Returns:
        Display-normalized text ("" for empty input).
    """
    if not text:
        return ""
    result = text.lower()
    result = strip_zalgo(result)
    result = fold_homoglyphs(result)
    return fold_leet(result)


def normalize(text: str | None, collapse: bool = True) -> str:
    """Fully normalize text for matching.

    Applies the display normalization, then collapses repeated characters
    and strips separators.

    Args:
        text: Raw text. ``None`` is treated as empty.
        collapse: Collapse runs of one character to two. Word matching
            turns this off so it can tell stretched letters ("dddarn")
            from genuine doubles ("good").

    Returns:
        Canonical text ("" for empty input).
    """
    if not text:
        return ""
    result = normalize_for_display(text)
    if collapse:
        result = collapse_repeats(result)
    return strip_separators(result)


def normalize_words(
    text: str | None,
    trim_edges: bool = False,
    collapse: bool = True,
) -> str:
    """Fully normalize each whitespace-delimited token separately.

    ``normalize`` glues neighbouring words together, so "you are a d4rn
    fool" becomes "youareadarnfool" and no word in it has a clean
    boundary. Normalizing per token keeps one space between tokens.

    Args:
        text: Raw text. ``None`` is treated as empty.
        trim_edges: Strip separator characters from both ends of each
            token before normalizing, so a trailing "!" is not folded
            into an "i" glued onto the word.
        collapse: Passed on to ``normalize`` for each token.

    Returns:
        Normalized tokens joined by single spaces.
    """
    if not text:
        return ""
    tokens = []
    for token in text.split():
        if trim_edges:
            token = token.strip(_SEPARATOR_CHARS)
        normalized = normalize(token, collapse=collapse)
        if normalized:
            tokens.append(normalized)
    return " ".join(tokens)


class Normalizer:
    """Injectable wrapper around the module-level normalization functions.

    Holds no state; one instance can be shared by any number of threads.
    """

    def normalize(self, text: str | None, collapse: bool = True) -> str:
        """See :func:`normalize`."""
        return normalize(text, collapse=collapse)

    def normalize_for_display(self, text: str | None) -> str:
        """See :func:`normalize_for_display`."""
        return normalize_for_display(text)

    def normalize_words(
        self,
        text: str | None,
        trim_edges: bool = False,
        collapse: bool = True,
    ) -> str:
        """See :func:`normalize_words`."""
        return normalize_words(text, trim_edges=trim_edges, collapse=collapse)

    def is_index_aligned(self, text: str | None) -> bool:
        """See :func:`is_index_aligned`."""
        return is_index_aligned(text)


def lowercase_aligned(text: str) -> str:
    """Lowercase ``text`` without changing its length.

    ``str.lower`` can expand a character (e.g. U+0130 becomes two code
    points), which would shift every later index. Such characters are left
    as they are.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in text)


def is_index_aligned(text: str | None) -> bool:
    """Check that ``normalize_for_display(text)`` lines up with ``text``.

    True when every character maps to exactly one display character, so an
    index into the display form is the same index into the original.
    Comparing total lengths is not enough: a dropped combining mark and an
    expanding lowercase can cancel out.
    """
    if not text:
        return True
    if text.isascii():
        return True
    return all(len(normalize_for_display(char)) == 1 for char in text)
