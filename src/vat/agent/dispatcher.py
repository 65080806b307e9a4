"""Intent dispatcher: classifies an utterance with ordered rule groups.

Groups run in order and all of them get a chance to answer; inside a
group the first rule whose trigger matches wins. Replies from every group
are joined into one message. Host commands are not executed here: each
matching command rule queues a CommandInvocation that the chat room runs
after the acknowledgment has been shown.
"""

from __future__ import annotations

import logging
import operator
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Sequence

from ..memory import MemoryStore
from ..nlp import Document, TextMode, tag
from . import responses as r
from .capabilities import CAPABILITIES
from .fallback import suggest
from .responses import Responder, capitalize
from .slots import SlotKind, dimension, text_after, tool_action, translation, unit_value

logger = logging.getLogger(__name__)


class ReplyKind(Enum):
    """Whether a rule answered or the fallback did."""

    MATCHED = "matched"
    FALLBACK = "fallback"


@dataclass
class CommandInvocation:
    """A host command queued by a turn."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class DispatchResult:
    """Result of dispatching one utterance."""

    reply: str
    kind: ReplyKind
    intents: list[str] = field(default_factory=list)
    invocations: list[CommandInvocation] = field(default_factory=list)


@dataclass
class Turn:
    """Working state while one utterance goes through the rule groups."""

    text: str
    doc: Document
    replies: list[str] = field(default_factory=list)
    intents: list[str] = field(default_factory=list)
    invocations: list[CommandInvocation] = field(default_factory=list)

    def say(self, text: str) -> None:
        self.replies.append(text)

    def invoke(self, command: str, /, **args: Any) -> None:
        self.invocations.append(CommandInvocation(command, args))


Trigger = Callable[[Turn], bool]
Handler = Callable[[Turn], None]


@dataclass(frozen=True)
class Rule:
    name: str
    trigger: Trigger
    handler: Handler


@dataclass(frozen=True)
class RuleGroup:
    name: str
    rules: tuple[Rule, ...]


def when(*patterns: str) -> Trigger:
    """Trigger on any of the patterns."""
    return lambda turn: any(turn.doc.has(p) for p in patterns)


def statement(*patterns: str) -> Trigger:
    """Like when(), but never for sentences holding a question word."""
    return lambda turn: not turn.doc.has("#QuestionWord") and any(
        turn.doc.has(p) for p in patterns
    )


def regex(expression: str) -> Trigger:
    """Trigger on a regular expression over the raw text."""
    compiled = re.compile(expression)
    return lambda turn: compiled.search(turn.text) is not None


ARITHMETIC = (
    ("add", r"\d+ *\+ *\d+", operator.add),
    ("subtract", r"\d+ *- *\d+", operator.sub),
    ("multiply", r"\d+ *\* *\d+", operator.mul),
    ("divide", r"\d+ *\/ *\d+", operator.truediv),
)

TIME_PATTERNS = ("what time is it", "^what's the time", "tell me the time")

NAME_KEYWORDS = ("name", "named", "called")


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _name_slot(doc: Document) -> str | None:
    for keyword in NAME_KEYWORDS:
        name = text_after(doc, keyword)
        if name:
            return name
    return None


class Dispatcher:
    """Turns one utterance into a reply and queued host commands."""

    def __init__(
        self,
        memory: MemoryStore,
        responder: Responder | None = None,
        capabilities: Sequence[str] = CAPABILITIES,
        user_name: str = "",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.memory = memory
        self.responder = responder or Responder()
        self.capabilities = tuple(capabilities)
        self.user_name = user_name
        self.clock = clock
        self.groups = self._build_groups()

    def respond(self, text: str) -> DispatchResult:
        """Classify text and build the reply.

        Every group is evaluated; the fallback suggestion is used when no
        group produced text. Commands queued by a silent rule (farewell)
        still run alongside the fallback.
        """
        turn = Turn(text=text, doc=tag(text))

        for group in self.groups:
            for rule in group.rules:
                if rule.trigger(turn):
                    turn.intents.append(rule.name)
                    rule.handler(turn)
                    break

        logger.debug("Intents for %r: %s", text, turn.intents)

        if not turn.replies:
            suggestion = suggest(text, self.capabilities)
            return DispatchResult(
                reply=self.responder.fallback(suggestion),
                kind=ReplyKind.FALLBACK,
                intents=turn.intents,
                invocations=turn.invocations,
            )

        return DispatchResult(
            reply=self.responder.assemble(turn.replies),
            kind=ReplyKind.MATCHED,
            intents=turn.intents,
            invocations=turn.invocations,
        )

    def _build_groups(self) -> list[RuleGroup]:
        def group(name: str, *rules: tuple[str, Trigger, Handler]) -> RuleGroup:
            return RuleGroup(name, tuple(Rule(*rule) for rule in rules))

        return [
            group("greeting", ("greet", when("(hello|hi|hey)"), self._greet)),
            group("arithmetic", *(
                (name, regex(expression), self._arithmetic(op))
                for name, expression, op in ARITHMETIC
            )),
            group(
                "subject",
                ("set_subject", when("^let's talk about ."), self._set_subject),
                ("query_subject", when("^what are we talking about"), self._query_subject),
            ),
            group("time", ("query_time", when(*TIME_PATTERNS), self._query_time)),
            group(
                "knowledge",
                ("is_a", statement(". is (a|an) ."), self._is_a),
                ("property_of", when("^what is #Determiner? . of #Determiner? ."), self._property_of),
                ("properties_of", when("^what are #Determiner? . of #Determiner? ."), self._properties_of),
                ("know_about", when("^what do you know about #Determiner? ."), self._know_about),
                ("what_is", when("^what is #Determiner? .$"), self._what_is),
                ("is", statement(". is ."), self._is),
            ),
            group("quantity_write", ("has_quantity", statement(". has #Value ."), self._has_quantity)),
            group(
                "quantity_query",
                ("how_many", when("^how many . (does|do) #Determiner? . have"), self._how_many),
            ),
            group("politeness", ("how_are_you", when("^how are you"), self._how_are_you)),
            group(
                "mirroring",
                ("you_are", when("^you are #Determiner #Adjective (bot|assistant)"), self._you_are),
            ),
            group(
                "capabilities",
                ("what_can_you_do", when("^what can you do"), self._what_can_you_do),
                ("help", when("^help me?$"), self._help),
            ),
            group(
                "command",
                ("open_model", when("open (#Determiner|#Possessive)? (model|file)"), self._simple("open_model")),
                ("clean_model", when("clean (#Determiner|#Possessive)? model"), self._simple("clean_model")),
                ("select_first_entity", when("select #Determiner? first entity"),
                    self._simple("select_first_entity")),
                ("select_first_group", when("select #Determiner? first group"),
                    self._simple("select_first_group")),
                ("select_groups_named", when("select #Determiner? (group|groups) (with|named|called)"),
                    self._named("select_groups_named")),
                ("select_first_component", when("select #Determiner? first component"),
                    self._simple("select_first_component")),
                ("select_components_named",
                    when("select #Determiner? (component|components) (with|named|called)"),
                    self._named("select_components_named")),
                ("move_selection", when("move #Determiner? selection"), self._move),
                ("rotate_selection", when("rotate #Determiner? selection"), self._rotate),
                ("scale_selection", when("(increase|scale) #Determiner? selection"), self._scale),
                ("rename_selection", when("rename #Determiner? selection"), self._named("rename_selection")),
                ("copy_selection", when("(duplicate|copy) #Determiner? selection"),
                    self._named("copy_selection")),
                ("clear_selection", when("(clear|deselect) #Determiner? selection"),
                    self._simple("clear_selection")),
                ("erase_selected", when("(erase|delete|remove) #Determiner? (selection|selected)"),
                    self._simple("erase_selected")),
                ("send_action", when("activate ."), self._activate),
                ("draw_box", when("draw #Pronoun? #Determiner? (cube|box)"), self._draw_box),
                ("draw_cone", when("draw #Pronoun? #Determiner? cone"), self._draw_round("draw_cone")),
                ("draw_cylinder", when("draw #Pronoun? #Determiner? cylinder"),
                    self._draw_round("draw_cylinder")),
                ("draw_prism", when("draw #Pronoun? #Determiner? prism"),
                    self._draw_sided("draw_prism", 6)),
                ("draw_pyramid", when("draw #Pronoun? #Determiner? pyramid"),
                    self._draw_sided("draw_pyramid", 4)),
                ("draw_sphere", when("draw #Pronoun? #Determiner? sphere"), self._draw_sphere),
                ("write_text", when("write ."), self._write),
                ("search_extension",
                    when("search for #Pronoun? #Determiner? (extension|extensions|plugin|plugins) about"),
                    self._search),
            ),
            group("farewell", ("close_session", when("(goodbye|bye)", "see you"), self._farewell)),
            group("thanks", ("thanks", when("(thanks|thx)", "thank you"), self._thanks)),
            group(
                "agreement",
                ("agree", lambda turn: not turn.text.strip() or turn.doc.has("(ok|okay|good|well)"),
                    self._agree),
            ),
        ]

    # Small talk

    def _greet(self, turn: Turn) -> None:
        turn.say(f"Hello {self.user_name}!" if self.user_name else "Hello!")

    def _arithmetic(self, op: Callable[[int, int], float]) -> Handler:
        def handler(turn: Turn) -> None:
            left, right = (int(n) for n in re.findall(r"\d+", turn.text)[:2])
            try:
                turn.say(_format_number(op(left, right)))
            except ZeroDivisionError:
                turn.say("I can't divide by zero.")
        return handler

    def _set_subject(self, turn: Turn) -> None:
        topic = turn.doc.after("^let's talk about").text(TextMode.RAW)
        self.memory.set_subject(topic)
        turn.say(self.responder.synonym(r.OK))

    def _query_subject(self, turn: Turn) -> None:
        turn.say(f"We're talking about {self.memory.subject}.")

    def _query_time(self, turn: Turn) -> None:
        now = self.clock()
        turn.say(f"It's {now.hour}:{now.minute}:{now.second}.")

    def _how_are_you(self, turn: Turn) -> None:
        turn.say("I'm fine and you?")

    def _you_are(self, turn: Turn) -> None:
        adjective = turn.doc.match("^you are #Determiner [#Adjective]").text(TextMode.RAW)
        article = "an" if adjective[:1].lower() in "aeiou" else "a"
        turn.say(f"You are {article} {adjective} person.")

    def _capability_dump(self) -> str:
        return "Choose a sentence then customize it:\n - " + "\n - ".join(self.capabilities)

    def _what_can_you_do(self, turn: Turn) -> None:
        turn.say("I can do many things.")
        turn.say(self._capability_dump())

    def _help(self, turn: Turn) -> None:
        turn.say("I can maybe help you.")
        turn.say(self._capability_dump())

    def _farewell(self, turn: Turn) -> None:
        turn.invoke("close_session")

    def _thanks(self, turn: Turn) -> None:
        turn.say(self.responder.synonym(r.WELCOME))

    def _agree(self, turn: Turn) -> None:
        turn.say(r.THUMBS_UP)

    # Knowledge

    def _is_a(self, turn: Turn) -> None:
        name = turn.doc.match("[.] is (a|an)").text(TextMode.RAW)
        class_name = turn.doc.after(". is (a|an)").text(TextMode.RAW)
        if class_name:
            self.memory.add_class(name, class_name)
        turn.say(self.responder.synonym(r.TAKE_NOTE))

    def _property_of(self, turn: Turn) -> None:
        prop = turn.doc.match("^what is #Determiner? [.] of").text(TextMode.RAW)
        name = turn.doc.match("^what is #Determiner? . of #Determiner? [.]").text(TextMode.RAW)
        values = self.memory.property_values(name, prop)
        turn.say(capitalize(values[0]) + "." if values else r.DONT_KNOW)

    def _properties_of(self, turn: Turn) -> None:
        prop = turn.doc.match("^what are #Determiner? [.] of").text(TextMode.SINGULAR)
        name = turn.doc.match("^what are #Determiner? . of #Determiner? [.]").text(TextMode.RAW)
        values = self.memory.property_values(name, prop)
        turn.say(capitalize(" and ".join(values)) + "." if values else r.DONT_KNOW)

    def _describe(self, name: str) -> str | None:
        classes = self.memory.classes_of(name)
        if not classes:
            return None
        return f"{capitalize(name)} is a {' and a '.join(classes)}."

    def _know_about(self, turn: Turn) -> None:
        name = turn.doc.match("^what do you know about #Determiner? [.]").text(TextMode.RAW)
        turn.say(self._describe(name) or r.NOTHING)

    def _what_is(self, turn: Turn) -> None:
        name = turn.doc.match("^what is #Determiner? [.]$").text(TextMode.RAW)
        turn.say(self._describe(name) or r.DONT_KNOW)

    def _is(self, turn: Turn) -> None:
        name = turn.doc.match("[.] is .").text(TextMode.RAW)
        value = turn.doc.match(". is [.]").text(TextMode.RAW)
        key = self.memory.link(name, value)
        if key is None:
            logger.debug("%r has no class, nothing recorded for %r", value, name)
        turn.say(self.responder.synonym(r.TAKE_NOTE))

    def _has_quantity(self, turn: Turn) -> None:
        name = turn.doc.match("[.] has #Value .").text(TextMode.RAW)
        amount = turn.doc.match(". has [#Value] .").text(TextMode.RAW)
        prop = turn.doc.match(". has #Value [.]").text(TextMode.RAW)
        self.memory.set_quantity(name, prop, amount)
        turn.say(self.responder.synonym(r.TAKE_NOTE))

    def _how_many(self, turn: Turn) -> None:
        prop = turn.doc.match("^how many [.] (does|do)").text(TextMode.RAW)
        name = turn.doc.match("^how many . (does|do) #Determiner? [.] have").text(TextMode.RAW)
        values = self.memory.property_values(name, prop)
        turn.say(f"{values[0]}." if values else r.DONT_KNOW)

    # Host commands

    def _acknowledge(self, turn: Turn, command: str, /, **args: Any) -> None:
        turn.say(self.responder.synonym(r.OK))
        turn.invoke(command, **args)

    def _simple(self, command: str) -> Handler:
        return lambda turn: self._acknowledge(turn, command)

    def _named(self, command: str) -> Handler:
        def handler(turn: Turn) -> None:
            name = _name_slot(turn.doc)
            if name is not None:
                self._acknowledge(turn, command, name=name)
        return handler

    def _move(self, turn: Turn) -> None:
        dx, dy, dz = translation(turn.doc)
        self._acknowledge(turn, "move_selection", dx=dx, dy=dy, dz=dz)

    def _rotate(self, turn: Turn) -> None:
        angle = unit_value(turn.doc, "degrees", SlotKind.INTEGER)
        if angle is not None:
            self._acknowledge(turn, "rotate_selection", angle=int(angle))

    def _scale(self, turn: Turn) -> None:
        factor = unit_value(turn.doc, "times", SlotKind.NUMBER)
        if factor is not None:
            self._acknowledge(turn, "scale_selection", factor=float(factor))

    def _activate(self, turn: Turn) -> None:
        action = tool_action(turn.doc)
        if action is not None:
            self._acknowledge(turn, "send_action", action=action)

    def _draw_box(self, turn: Turn) -> None:
        self._acknowledge(
            turn,
            "draw_box",
            width=dimension(turn.doc, "width"),
            depth=dimension(turn.doc, "depth"),
            height=dimension(turn.doc, "height"),
        )

    def _draw_round(self, command: str) -> Handler:
        def handler(turn: Turn) -> None:
            self._acknowledge(
                turn,
                command,
                radius=dimension(turn.doc, "radius"),
                height=dimension(turn.doc, "height"),
            )
        return handler

    def _draw_sided(self, command: str, default_sides: int) -> Handler:
        def handler(turn: Turn) -> None:
            sides = unit_value(turn.doc, "sides", SlotKind.INTEGER)
            self._acknowledge(
                turn,
                command,
                radius=dimension(turn.doc, "radius"),
                height=dimension(turn.doc, "height"),
                sides=default_sides if sides is None else int(sides),
            )
        return handler

    def _draw_sphere(self, turn: Turn) -> None:
        self._acknowledge(turn, "draw_sphere", radius=dimension(turn.doc, "radius"))

    def _write(self, turn: Turn) -> None:
        text = text_after(turn.doc, "write")
        if text is not None:
            self._acknowledge(turn, "write_text", text=text)

    def _search(self, turn: Turn) -> None:
        topic = text_after(turn.doc, "about")
        if topic is not None:
            self._acknowledge(turn, "search_extension", topic=topic)
