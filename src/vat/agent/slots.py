"""Slot extraction: typed parameters pulled out of matched text."""

import re
from enum import Enum

from ..nlp import Document, Span, TextMode

AXES = ("X", "Y", "Z")

DEFAULT_LENGTH = "1m"


class SlotKind(Enum):
    """Expected type of a slot."""

    LENGTH = "length"
    INTEGER = "integer"
    NUMBER = "number"
    FREE_TEXT = "free_text"


def extract(span: Span, kind: SlotKind) -> str | int | float | None:
    """Convert a captured span into a typed value.

    Returns None for an empty span, and for numbers that don't parse.
    """
    text = span.text(TextMode.RAW).strip()
    if not text:
        return None

    if kind is SlotKind.INTEGER:
        try:
            return int(float(text.replace(",", ".")))
        except ValueError:
            return None
    if kind is SlotKind.NUMBER:
        try:
            return float(text.replace(",", "."))
        except ValueError:
            return None
    return text


def axis_offset(doc: Document, axis: str) -> str:
    """Signed translation along one axis, "0" when the axis isn't mentioned."""
    positive = doc.match(f"[#Value] along #Determiner? positive? {axis} axis")
    value = extract(positive, SlotKind.LENGTH)
    if value is not None:
        return str(value)

    negative = doc.match(f"[#Value] along #Determiner? negative {axis} axis")
    value = extract(negative, SlotKind.LENGTH)
    if value is not None:
        return f"-{value}"

    return "0"


def translation(doc: Document) -> tuple[str, str, str]:
    """Offsets along X, Y and Z, each resolved independently."""
    dx, dy, dz = (axis_offset(doc, axis) for axis in AXES)
    return dx, dy, dz


def unit_value(
    doc: Document, unit: str, kind: SlotKind = SlotKind.INTEGER
) -> int | float | None:
    """Number written right before a unit word, e.g. "90 degrees"."""
    value = extract(doc.match(f"[#NumericValue] {unit}"), kind)
    if isinstance(value, str):
        return None
    return value


def dimension(doc: Document, name: str, default: str = DEFAULT_LENGTH) -> str:
    """Length given as "<name> of 2m", or the default."""
    value = extract(doc.match(f"{name} #Preposition [#Value]"), SlotKind.LENGTH)
    return default if value is None else str(value)


def text_after(doc: Document, keyword: str) -> str | None:
    """Text typed after a keyword, or None when nothing follows.

    Inner punctuation is kept as typed; a closing full stop is dropped.
    """
    text = doc.text_after(keyword).removesuffix(".").rstrip()
    return text or None


# Applied in order on the cumulative result.
TOOL_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("select", "selection"),
    ("eraser", "erase"),
    ("paint bucket", "paint"),
    ("follow me", "extrude"),
    ("tape measure", "measure"),
    ("axes", "axis"),
    ("dimensions", "dimension"),
    ("activate", "select"),
)

TOOL_FILLERS = frozenset({"please", "kindly", "now"})


def tool_action(doc: Document) -> str | None:
    """Turn "activate the paint bucket tool" into "selectPaintTool:"."""
    if not doc.has("activate"):
        return None

    words = ["activate"] + [
        term.normal
        for term in doc.after("activate").terms
        if term.normal not in TOOL_FILLERS and not term.has_tag("Determiner")
    ]
    if len(words) < 2:
        return None

    phrase = " ".join(words)
    for old, new in TOOL_SUBSTITUTIONS:
        phrase = re.sub(rf"\b{re.escape(old)}\b", new, phrase)

    first, *rest = phrase.split()
    return first + "".join(word.capitalize() for word in rest) + ":"
