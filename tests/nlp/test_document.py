"""Tests for Document queries and spans."""

from vat.nlp import Span, TextMode, singularize, tag


def test_match_returns_capture():
    doc = tag("What is the color of Ball?")
    span = doc.match("^what is #Determiner? . of #Determiner? [.]")
    assert span.text() == "Ball"


def test_match_without_capture_returns_whole_match():
    doc = tag("please open the model now")
    assert doc.match("open #Determiner? model").text() == "open the model"


def test_match_no_match_is_empty():
    span = tag("hello").match("[.] is .")
    assert not span
    assert len(span) == 0
    assert span.text() == ""


def test_multi_term_capture():
    doc = tag("my ball is a red toy")
    assert doc.match("[#Possessive .] is").text() == "my ball"


def test_before_and_after():
    doc = tag("Write Hello world")
    assert doc.after("write").text() == "Hello world"
    assert doc.before("world").text() == "Write Hello"


def test_after_missing_pattern_is_empty():
    assert tag("hello").after("write") == Span()


def test_text_after_keeps_source_text():
    doc = tag("Write  \"Hello,  world!\" ")
    assert doc.text_after("write") == "\"Hello,  world!\""
    assert doc.after("write").text() == "Hello world"


def test_text_after_empty():
    assert tag("Write").text_after("write") == ""
    assert tag("hello").text_after("write") == ""


def test_text_modes():
    doc = tag("Green Wheels")
    span = doc.match("[. .]")
    assert span.text(TextMode.RAW) == "Green Wheels"
    assert span.text(TextMode.NORMAL) == "green wheels"
    assert span.text(TextMode.SINGULAR) == "green wheel"


def test_document_length():
    assert len(tag("a b c")) == 3


class TestSingularize:
    """Tests for singularize."""

    def test_regular_plural(self):
        assert singularize("wheels") == "wheel"

    def test_ies_plural(self):
        assert singularize("properties") == "property"

    def test_es_plural(self):
        assert singularize("boxes") == "box"
        assert singularize("benches") == "bench"

    def test_irregular(self):
        assert singularize("people") == "person"
        assert singularize("axes") == "axis"

    def test_already_singular(self):
        assert singularize("glass") == "glass"
        assert singularize("axis") == "axis"
        assert singularize("box") == "box"
