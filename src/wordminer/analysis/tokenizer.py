"""Tokenizer for article text.

Splits text into maximal runs of ASCII letters. No case folding or
other normalization happens here; that is the lemmatizer's job.
"""

from collections.abc import Iterator
from typing import Optional

from wordminer.constants import WORD_PATTERN
from wordminer.models import Token


class TokenStream:
    """Lazy, restartable sequence of tokens over one text.

    Each call to ``iter()`` rescans the text from the start, so the
    same stream can be consumed more than once.

    Example:
        >>> stream = tokenize("Hello, world!")
        >>> [t.text for t in stream]
        ['Hello', 'world']
        >>> [t.start for t in stream]
        [0, 7]
    """

    def __init__(self, text: Optional[str]):
        self._text = text or ""

    @property
    def text(self) -> str:
        return self._text

    def __iter__(self) -> Iterator[Token]:
        for match in WORD_PATTERN.finditer(self._text):
            yield Token(text=match.group(), start=match.start(), end=match.end())

    def words(self) -> Iterator[str]:
        """Yield only the token strings."""
        for token in self:
            yield token.text

    def count(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"TokenStream({len(self._text)} chars)"


def tokenize(text: Optional[str]) -> TokenStream:
    """Tokenize text into letter runs.

    Args:
        text: Arbitrary text (None is treated as empty)

    Returns:
        TokenStream yielding Token objects left to right
    """
    return TokenStream(text)


def segments(text: Optional[str]) -> Iterator[tuple[bool, str]]:
    """Split text into alternating word and gap fragments.

    Yields ``(is_word, fragment)`` pairs that cover the whole input,
    so ``"".join(f for _, f in segments(s)) == s``. Readers use this
    to rebuild the article with per-word decoration.
    """
    text = text or ""
    offset = 0
    for token in tokenize(text):
        if token.start > offset:
            yield False, text[offset:token.start]
        yield True, token.text
        offset = token.end
    if offset < len(text):
        yield False, text[offset:]
