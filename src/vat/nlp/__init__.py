"""Pattern matching over tagged text."""

from .document import Document, Span, TextMode, tag
from .lexicon import singularize
from .pattern import Pattern, PatternError, compile_pattern
from .tagger import Term

__all__ = [
    "Document",
    "Pattern",
    "PatternError",
    "Span",
    "Term",
    "TextMode",
    "compile_pattern",
    "singularize",
    "tag",
]
