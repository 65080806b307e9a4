"""Reply wording: synonyms, message assembly and completion phrases."""

import random
from typing import Sequence

from ..host import CommandResult, CommandStatus, HostCommand

TAKE_NOTE = "I take note."
OK = "OK."
DONE = "It's done."
WELCOME = "You're welcome."
DONT_KNOW = "I don't know."
NOTHING = "Nothing."
THUMBS_UP = "👍"
NOTHING_SELECTED = "Nothing is selected!"
SOMETHING_WRONG = "Something went wrong!"
NOT_UNDERSTOOD = "I didn't understand..."

SYNONYMS: dict[str, tuple[str, ...]] = {
    TAKE_NOTE: (TAKE_NOTE, "Noted.", "It's understood."),
    OK: (OK, "Okay.", "Good idea.", "Let's go!"),
    DONE: (DONE, "Mission complete."),
    WELCOME: (WELCOME, "No problem.", "😉"),
}


def capitalize(text: str) -> str:
    """Uppercase the first character only."""
    return text[:1].upper() + text[1:]


class Responder:
    """Builds the text the bot says."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def synonym(self, expression: str) -> str:
        """A random variant of a stock expression (itself if unknown)."""
        variants = SYNONYMS.get(expression)
        if not variants:
            return expression
        return self.rng.choice(variants)

    def assemble(self, replies: Sequence[str]) -> str:
        return " ".join(reply for reply in replies if reply)

    def fallback(self, suggestion: str) -> str:
        if not suggestion:
            return f"{NOT_UNDERSTOOD} Could you reformulate your sentence?"
        return f"{NOT_UNDERSTOOD} Did you mean: {suggestion}"

    def completion(self, command: HostCommand | None, result: CommandResult) -> str | None:
        """Follow-up line for a finished host command, None to stay quiet."""
        if result.status is CommandStatus.DONE:
            if command is not None and command.silent:
                return None
            return self.synonym(DONE)
        if result.status is CommandStatus.NOT_FOUND:
            return command.not_found_message if command is not None else SOMETHING_WRONG
        if result.status is CommandStatus.NOTHING_SELECTED:
            return NOTHING_SELECTED
        return SOMETHING_WRONG
