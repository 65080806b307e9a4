"""Declarative token patterns.

A pattern is a whitespace separated sequence of steps matched against the
terms of a tagged document:

    word        literal, compared with the lowercase form of a term
    .           any single term
    #Tag        a term carrying the tag
    (a|#Tag)    any of the alternatives
    step?       optional step
    ^ / $       anchor the first step at the start, the last at the end
    [ ... ]     captured span (at most one per pattern)

Example: ``^what is #Determiner? [.] of #Determiner? .``
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

from .tagger import Term, normalize

ANY = "."


class PatternError(ValueError):
    """Raised when a pattern string cannot be compiled."""


@dataclass(frozen=True)
class Step:
    """One position of a pattern."""

    alternatives: tuple[str, ...]
    optional: bool = False
    captured: bool = False

    def accepts(self, term: Term) -> bool:
        for alternative in self.alternatives:
            if alternative == ANY:
                return True
            if alternative.startswith("#"):
                if term.has_tag(alternative[1:]):
                    return True
            elif alternative == term.normal:
                return True
        return False


@dataclass(frozen=True)
class Match:
    """Where a pattern matched inside a term sequence."""

    start: int
    end: int
    captured: tuple[int, ...] = ()


class Pattern:
    """A compiled pattern."""

    def __init__(
        self,
        source: str,
        steps: Sequence[Step],
        anchored_start: bool = False,
        anchored_end: bool = False,
    ) -> None:
        self.source = source
        self.steps = tuple(steps)
        self.anchored_start = anchored_start
        self.anchored_end = anchored_end
        self.has_capture = any(step.captured for step in self.steps)

    def __repr__(self) -> str:
        return f"Pattern({self.source!r})"

    def search(self, terms: Sequence[Term]) -> Match | None:
        """Find the leftmost match; optional steps are tried greedily."""
        starts = range(1) if self.anchored_start else range(len(terms) + 1)
        for start in starts:
            found = self._walk(0, start, terms, ())
            if found is not None:
                end, captured = found
                return Match(start=start, end=end, captured=captured)
        return None

    def _walk(
        self,
        index: int,
        pos: int,
        terms: Sequence[Term],
        captured: tuple[int, ...],
    ) -> tuple[int, tuple[int, ...]] | None:
        if index == len(self.steps):
            if self.anchored_end and pos != len(terms):
                return None
            return pos, captured

        step = self.steps[index]
        if pos < len(terms) and step.accepts(terms[pos]):
            consumed = captured + (pos,) if step.captured else captured
            found = self._walk(index + 1, pos + 1, terms, consumed)
            if found is not None:
                return found

        if step.optional:
            return self._walk(index + 1, pos, terms, captured)

        return None


def _parse_alternatives(raw: str, source: str) -> tuple[str, ...]:
    if raw.startswith("("):
        if not raw.endswith(")"):
            raise PatternError(f"Unbalanced parenthesis in pattern: {source!r}")
        options = raw[1:-1].split("|")
    else:
        options = [raw]

    alternatives = []
    for option in options:
        if not option or option == "#":
            raise PatternError(f"Empty alternative in pattern: {source!r}")
        if option == ANY or option.startswith("#"):
            alternatives.append(option)
        else:
            alternatives.append(normalize(option))
    return tuple(alternatives)


@lru_cache(maxsize=512)
def compile_pattern(source: str) -> Pattern:
    """Compile a pattern string into a Pattern.

    Raises:
        PatternError: If the pattern is empty or malformed.
    """
    tokens = source.split()
    if not tokens:
        raise PatternError("Empty pattern")

    anchored_start = anchored_end = False
    steps: list[Step] = []
    in_capture = False
    captures = 0

    for i, raw in enumerate(tokens):
        if i == 0 and raw.startswith("^"):
            anchored_start = True
            raw = raw[1:]
        if i == len(tokens) - 1 and raw.endswith("$"):
            anchored_end = True
            raw = raw[:-1]

        opens = raw.startswith("[")
        if opens:
            if in_capture or captures:
                raise PatternError(f"Only one capture allowed: {source!r}")
            in_capture = True
            captures += 1
            raw = raw[1:]

        optional = False
        if raw.endswith("?") and len(raw) > 1:
            optional = True
            raw = raw[:-1]

        closes = raw.endswith("]")
        if closes:
            if not in_capture:
                raise PatternError(f"Unbalanced bracket in pattern: {source!r}")
            raw = raw[:-1]

        if raw.endswith("?") and len(raw) > 1:
            optional = True
            raw = raw[:-1]

        if not raw:
            raise PatternError(f"Empty step in pattern: {source!r}")

        steps.append(
            Step(
                alternatives=_parse_alternatives(raw, source),
                optional=optional,
                captured=in_capture,
            )
        )

        if closes:
            in_capture = False

    if in_capture:
        raise PatternError(f"Unbalanced bracket in pattern: {source!r}")

    return Pattern(source, steps, anchored_start, anchored_end)
