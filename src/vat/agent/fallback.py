"""Nearest-capability suggestion for utterances no rule understood."""

from typing import Sequence


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings.

    Single-row dynamic programming; memory is O(min(len(a), len(b))).
    """
    if len(a) > len(b):
        a, b = b, a

    row = list(range(len(a) + 1))
    for j, char_b in enumerate(b, start=1):
        prev = j
        for i, char_a in enumerate(a, start=1):
            if char_a == char_b:
                value = row[i - 1]
            else:
                value = min(row[i - 1] + 1, prev + 1, row[i] + 1)
            row[i - 1] = prev
            prev = value
        row[len(a)] = prev

    return row[len(a)]


def first_token(text: str) -> str:
    """First whitespace-delimited token, or an empty string."""
    parts = text.split(maxsplit=1)
    return parts[0] if parts else ""


def suggest(utterance: str, capabilities: Sequence[str]) -> str:
    """Return the capability whose first word is closest to the utterance's.

    Ties go to the later capability in catalogue order.
    """
    verb = first_token(utterance).lower()
    best = ""
    best_distance: int | None = None

    for capability in capabilities:
        candidate = first_token(capability).lower()
        if not candidate:
            continue
        distance = levenshtein(verb, candidate)
        if best_distance is None or distance <= best_distance:
            best_distance = distance
            best = capability

    return best
