"""Tagged documents and spans."""

from dataclasses import dataclass
from enum import Enum

from .lexicon import singularize
from .pattern import Match, compile_pattern
from .tagger import Term, tag_terms


class TextMode(Enum):
    """How a span renders its terms."""

    RAW = "raw"
    NORMAL = "normal"
    SINGULAR = "singular"


@dataclass(frozen=True)
class Span:
    """A contiguous run of terms taken from a document."""

    terms: tuple[Term, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def text(self, mode: TextMode = TextMode.RAW) -> str:
        if mode is TextMode.NORMAL:
            return " ".join(term.normal for term in self.terms)
        if mode is TextMode.SINGULAR:
            return " ".join(singularize(term.normal) for term in self.terms)
        return " ".join(term.text for term in self.terms)


class Document:
    """An utterance split into tagged terms, queried with patterns."""

    def __init__(self, text: str, terms: list[Term]) -> None:
        self.text = text
        self.terms = tuple(terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __repr__(self) -> str:
        return f"Document({self.text!r})"

    def _search(self, pattern: str) -> Match | None:
        return compile_pattern(pattern).search(self.terms)

    def has(self, pattern: str) -> bool:
        """True if the pattern matches anywhere in the document."""
        return self._search(pattern) is not None

    def match(self, pattern: str) -> Span:
        """Return the captured span, or the whole match without a capture.

        An empty span means the pattern did not match (or captured nothing).
        """
        found = self._search(pattern)
        if found is None:
            return Span()
        if compile_pattern(pattern).has_capture:
            return Span(tuple(self.terms[i] for i in found.captured))
        return Span(self.terms[found.start:found.end])

    def before(self, pattern: str) -> Span:
        """Return the terms preceding the first match."""
        found = self._search(pattern)
        if found is None:
            return Span()
        return Span(self.terms[:found.start])

    def after(self, pattern: str) -> Span:
        """Return the terms following the first match."""
        found = self._search(pattern)
        if found is None:
            return Span()
        return Span(self.terms[found.end:])

    def text_after(self, pattern: str) -> str:
        """Return the source text following the first match, as typed.

        Punctuation inside the text is kept; only surrounding whitespace
        is trimmed. Empty when the pattern does not match or nothing follows.
        """
        found = self._search(pattern)
        if found is None or found.end >= len(self.terms):
            return ""
        return self.text[self.terms[found.end].start:].strip()


def tag(text: str) -> Document:
    """Tokenize and tag raw text."""
    return Document(text, tag_terms(text))
