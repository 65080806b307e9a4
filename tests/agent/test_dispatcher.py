"""Tests for the intent dispatcher."""

import random
from datetime import datetime

import pytest

from vat.agent import CommandInvocation, Dispatcher, ReplyKind, Responder
from vat.agent import responses as r
from vat.memory import MemoryStore


@pytest.fixture
def memory() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def dispatcher(memory: MemoryStore) -> Dispatcher:
    return Dispatcher(
        memory,
        responder=Responder(random.Random(0)),
        user_name="Ana",
        clock=lambda: datetime(2024, 5, 1, 9, 5, 7),
    )


def reply(dispatcher: Dispatcher, text: str) -> str:
    return dispatcher.respond(text).reply


class TestSmallTalk:
    """Greeting, politeness and other canned replies."""

    def test_greeting_uses_user_name(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Hello") == "Hello Ana!"

    def test_greeting_without_user_name(self, memory: MemoryStore):
        dispatcher = Dispatcher(memory)
        assert reply(dispatcher, "hi") == "Hello!"

    def test_how_are_you(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "How are you?") == "I'm fine and you?"

    def test_mirroring(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "You are a smart bot") == "You are a smart person."
        assert reply(dispatcher, "You are an awesome assistant") == "You are an awesome person."

    def test_time(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "What time is it?") == "It's 9:5:7."

    def test_greeting_and_time_are_joined(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Hello, what time is it?") == "Hello Ana! It's 9:5:7."

    def test_thanks(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Thank you") in r.SYNONYMS[r.WELCOME]

    def test_blank_input_gets_thumbs_up(self, dispatcher: Dispatcher):
        result = dispatcher.respond("   ")
        assert result.reply == "👍"
        assert result.kind is ReplyKind.MATCHED

    def test_agreement(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "ok") == "👍"

    def test_what_can_you_do(self, dispatcher: Dispatcher):
        text = reply(dispatcher, "What can you do?")
        assert text.startswith("I can do many things. Choose a sentence then customize it:\n - Open a model.")
        assert text.endswith(" - How many wheels does box have?")

    def test_help(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "help").startswith("I can maybe help you. Choose a sentence")


class TestArithmetic:
    """Arithmetic on two integers."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2 + 3", "5"),
            ("2+3", "5"),
            ("10 - 4", "6"),
            ("6 * 7", "42"),
            ("10 / 2", "5"),
            ("7 / 2", "3.5"),
            ("3 * 2 + 1", "5"),
            ("8 / 2 - 1", "6"),
            ("9 - 3 * 2", "6"),
        ],
    )
    def test_operations(self, dispatcher: Dispatcher, text: str, expected: str):
        assert reply(dispatcher, text) == expected

    def test_divide_by_zero(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "5 / 0") == "I can't divide by zero."


class TestSubject:
    """Discourse subject."""

    def test_unset(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "What are we talking about?") == "We're talking about nothing."

    def test_talk_about_you(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Let's talk about you.") in r.SYNONYMS[r.OK]
        assert reply(dispatcher, "What are we talking about?") == "We're talking about me."
        reply(dispatcher, "Let's talk about you.")
        assert reply(dispatcher, "What are we talking about?") == "We're talking about you."

    def test_talk_about_topic(self, dispatcher: Dispatcher, memory: MemoryStore):
        reply(dispatcher, "Let's talk about the Eiffel Tower")
        assert memory.subject == "the Eiffel Tower"


class TestKnowledge:
    """Classes, links and quantities."""

    def test_is_a_then_know_about(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Ball is a Toy") in r.SYNONYMS[r.TAKE_NOTE]
        assert reply(dispatcher, "What do you know about Ball?") == "Ball is a Toy."

    def test_repeated_class_is_listed_twice(self, dispatcher: Dispatcher):
        reply(dispatcher, "Ball is a Toy")
        reply(dispatcher, "Ball is a Toy")
        assert reply(dispatcher, "What do you know about Ball?") == "Ball is a Toy and a Toy."

    def test_what_is(self, dispatcher: Dispatcher):
        reply(dispatcher, "Ball is an Object")
        assert reply(dispatcher, "What is a ball?") == "Ball is a Object."

    def test_unknown_object(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "What do you know about Car?") == "Nothing."
        assert reply(dispatcher, "What is a car?") == "I don't know."

    def test_property_through_class(self, dispatcher: Dispatcher):
        reply(dispatcher, "Red is a Color")
        reply(dispatcher, "Ball is Red")
        assert reply(dispatcher, "What is the color of Ball?") == "Red."

    def test_properties_plural(self, dispatcher: Dispatcher):
        reply(dispatcher, "Red is a Color")
        reply(dispatcher, "Blue is a Color")
        reply(dispatcher, "Ball is Red")
        reply(dispatcher, "Ball is Blue")
        assert reply(dispatcher, "What are the colors of Ball?") == "Red and Blue."

    def test_unknown_property(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "What is the size of Ball?") == "I don't know."

    def test_quantity(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "Box has 4 Wheels") in r.SYNONYMS[r.TAKE_NOTE]
        assert reply(dispatcher, "How many Wheels does Box have?") == "4."

    def test_quantity_overwrites(self, dispatcher: Dispatcher):
        reply(dispatcher, "Box has 4 wheels")
        reply(dispatcher, "Box has 6 wheels")
        assert reply(dispatcher, "how many wheels does box have") == "6."

    def test_quantity_unknown(self, dispatcher: Dispatcher):
        assert reply(dispatcher, "How many wheels does Car have?") == "I don't know."

    def test_question_is_not_a_statement(self, dispatcher: Dispatcher, memory: MemoryStore):
        reply(dispatcher, "What is a ball?")
        assert len(memory) == 0


class TestCommands:
    """Host command rules."""

    def commands(self, dispatcher: Dispatcher, text: str) -> list[CommandInvocation]:
        result = dispatcher.respond(text)
        assert result.reply in r.SYNONYMS[r.OK]
        return result.invocations

    def test_open_model(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Open my model") == [CommandInvocation("open_model")]

    def test_clean_model(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Clean my model.") == [CommandInvocation("clean_model")]

    def test_select_first(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Select the first group") == [
            CommandInvocation("select_first_group")
        ]
        assert self.commands(dispatcher, "Select first component.") == [
            CommandInvocation("select_first_component")
        ]
        assert self.commands(dispatcher, "Select first entity.") == [
            CommandInvocation("select_first_entity")
        ]

    def test_select_named(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Select groups with name Wall.") == [
            CommandInvocation("select_groups_named", {"name": "Wall"})
        ]
        assert self.commands(dispatcher, "Select the components called Door") == [
            CommandInvocation("select_components_named", {"name": "Door"})
        ]

    def test_move(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Move the selection 2m along the negative X axis") == [
            CommandInvocation("move_selection", {"dx": "-2m", "dy": "0", "dz": "0"})
        ]

    def test_move_in_feet_and_inches(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Move selection 3' along X axis") == [
            CommandInvocation("move_selection", {"dx": "3'", "dy": "0", "dz": "0"})
        ]
        assert self.commands(dispatcher, 'Move selection 5" along the negative Z axis.') == [
            CommandInvocation("move_selection", {"dx": "0", "dy": "0", "dz": '-5"'})
        ]

    def test_rotate(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Rotate selection by 90 degrees.") == [
            CommandInvocation("rotate_selection", {"angle": 90})
        ]

    def test_scale(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Increase selection size 2 times.") == [
            CommandInvocation("scale_selection", {"factor": 2.0})
        ]

    def test_rename_and_copy(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Rename selection with name Table.") == [
            CommandInvocation("rename_selection", {"name": "Table"})
        ]
        assert self.commands(dispatcher, "Duplicate selection with name Chair.") == [
            CommandInvocation("copy_selection", {"name": "Chair"})
        ]

    def test_clear_and_erase(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Clear selection.") == [CommandInvocation("clear_selection")]
        assert self.commands(dispatcher, "Erase selection.") == [CommandInvocation("erase_selected")]

    def test_activate_tool(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Activate the paint bucket tool.") == [
            CommandInvocation("send_action", {"action": "selectPaintTool:"})
        ]

    def test_draw_box_with_defaults(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Draw me a cube with a width of 2m") == [
            CommandInvocation("draw_box", {"width": "2m", "depth": "1m", "height": "1m"})
        ]

    def test_draw_round_shapes(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Draw a cone with a radius of 2m and height of 3m") == [
            CommandInvocation("draw_cone", {"radius": "2m", "height": "3m"})
        ]
        assert self.commands(dispatcher, "Draw me a sphere with a radius of 50cm.") == [
            CommandInvocation("draw_sphere", {"radius": "50cm"})
        ]

    def test_draw_sided_shapes(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Draw me a prism with 8 sides") == [
            CommandInvocation("draw_prism", {"radius": "1m", "height": "1m", "sides": 8})
        ]
        assert self.commands(dispatcher, "Draw a pyramid") == [
            CommandInvocation("draw_pyramid", {"radius": "1m", "height": "1m", "sides": 4})
        ]

    def test_write(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Write Welcome home.") == [
            CommandInvocation("write_text", {"text": "Welcome home"})
        ]

    def test_write_keeps_punctuation(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Write Lunch, then tea!") == [
            CommandInvocation("write_text", {"text": "Lunch, then tea!"})
        ]

    def test_search(self, dispatcher: Dispatcher):
        assert self.commands(dispatcher, "Search for an extension about stairs") == [
            CommandInvocation("search_extension", {"topic": "stairs"})
        ]

    def test_missing_slot_queues_nothing(self, dispatcher: Dispatcher):
        result = dispatcher.respond("Rotate the selection")
        assert result.invocations == []
        assert result.kind is ReplyKind.FALLBACK

    def test_farewell_closes_session_after_fallback(self, dispatcher: Dispatcher):
        result = dispatcher.respond("Goodbye")
        assert result.kind is ReplyKind.FALLBACK
        assert result.reply.startswith("I didn't understand... ")
        assert result.invocations == [CommandInvocation("close_session")]


class TestFallback:
    """Utterances no rule understands."""

    def test_suggestion(self, dispatcher: Dispatcher):
        result = dispatcher.respond("Opens the model")
        assert result.kind is ReplyKind.FALLBACK
        assert result.reply == "I didn't understand... Did you mean: Open a model."
        assert result.invocations == []

    def test_without_capabilities(self, memory: MemoryStore):
        dispatcher = Dispatcher(memory, capabilities=())
        result = dispatcher.respond("Opens the model")
        assert result.reply == "I didn't understand... Could you reformulate your sentence?"


def test_intents_are_recorded(dispatcher: Dispatcher):
    result = dispatcher.respond("Hello, open the model")
    assert result.intents == ["greet", "open_model"]
