"""Tokenizer and lexicon tagger."""

import re
from dataclasses import dataclass

from .lexicon import (
    ADJECTIVE_SUFFIXES,
    ADJECTIVES,
    DETERMINERS,
    NUMERIC_RE,
    POSSESSIVES,
    PREPOSITIONS,
    PRONOUNS,
    QUESTION_WORDS,
    VALUE_RE,
)

# Stripped from both ends of every token. Operators (+ - * /) are kept.
PUNCTUATION = ".,!?;:\"'()[]{}<>…"

# Feet and inches marks, kept when they close a number.
UNIT_MARKS = "'\""
_OUTER_PUNCTUATION = "".join(c for c in PUNCTUATION if c not in UNIT_MARKS)


@dataclass(frozen=True)
class Term:
    """One token of an utterance.

    Attributes:
        text: The token as typed, without surrounding punctuation.
        normal: Lowercase form used for literal comparisons.
        tags: Part-of-speech style tags (e.g. 'Determiner', 'Value').
        start: Offset in the source text where the token's chunk starts,
            leading punctuation included.
        end: Offset just past the token itself.
    """

    text: str
    normal: str
    tags: frozenset[str]
    start: int = 0
    end: int = 0

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def normalize(word: str) -> str:
    """Lowercase a word and unify typographic apostrophes."""
    return word.replace("’", "'").replace("‘", "'").lower()


def tag_word(normal: str) -> frozenset[str]:
    """Tag a normalized word using the lexicon."""
    tags: set[str] = set()

    if normal in DETERMINERS:
        tags.add("Determiner")
    if normal in POSSESSIVES:
        tags.add("Possessive")
    if normal in PRONOUNS:
        tags.add("Pronoun")
    if normal in PREPOSITIONS:
        tags.add("Preposition")
    if normal in QUESTION_WORDS:
        tags.add("QuestionWord")
    if VALUE_RE.fullmatch(normal):
        tags.add("Value")
        if NUMERIC_RE.fullmatch(normal):
            tags.add("NumericValue")

    if not tags and (normal in ADJECTIVES or normal.endswith(ADJECTIVE_SUFFIXES)):
        tags.add("Adjective")

    if not tags:
        tags.add("Noun")

    return frozenset(tags)


def strip_chunk(chunk: str) -> tuple[str, int]:
    """Strip punctuation from a whitespace chunk.

    A foot or inch mark right after a number is part of the value (3', 5").

    Returns:
        The token and its offset inside the chunk.
    """
    token = chunk.strip(_OUTER_PUNCTUATION)
    is_measure = (
        token[-1:] in UNIT_MARKS
        and token[:1] not in UNIT_MARKS
        and VALUE_RE.fullmatch(normalize(token)) is not None
    )
    if not is_measure:
        token = chunk.strip(PUNCTUATION)
    return token, chunk.find(token) if token else 0


def tokenize(text: str) -> list[str]:
    """Split text on whitespace and strip surrounding punctuation."""
    return [term.text for term in tag_terms(text)]


def tag_terms(text: str) -> list[Term]:
    """Tokenize and tag text, keeping each token's place in the text."""
    terms = []
    for chunk in re.finditer(r"\S+", text):
        token, offset = strip_chunk(chunk.group())
        if not token:
            continue
        normal = normalize(token)
        terms.append(
            Term(
                text=token,
                normal=normal,
                tags=tag_word(normal),
                start=chunk.start(),
                end=chunk.start() + offset + len(token),
            )
        )
    return terms
