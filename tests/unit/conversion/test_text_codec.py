"""Tests for conversion.text_codec and conversion.coercion modules."""

import pytest

from error_notifier.conversion.coercion import cell_text, to_text
from error_notifier.conversion.text_codec import parse_text, render_text
from error_notifier.payloads import Fault, Message


class TestParseText:
    """Tests for parse_text."""

    def test_single_line_record(self) -> None:
        """A single line is trimmed and measured."""
        record = parse_text("  hello  ")

        assert record["content"] == "hello"
        assert record["length"] == 5
        assert record["timestamp"].endswith("Z")

    def test_multi_line_records(self) -> None:
        """Each line becomes a numbered record."""
        assert parse_text("L1\nL2") == [
            {"lineNumber": 1, "content": "L1", "characterCount": 2},
            {"lineNumber": 2, "content": "L2", "characterCount": 2},
        ]

    def test_character_count_measures_untrimmed_line(self) -> None:
        """Inner lines keep their whitespace for characterCount."""
        records = parse_text("first\n  indented  \nlast")

        assert records[1] == {"lineNumber": 2, "content": "indented", "characterCount": 12}

    def test_non_string_is_wrapped(self) -> None:
        """Structured input is stringified into a content record."""
        record = parse_text({"a": 1})

        assert record["content"] == '{"a":1}'
        assert "length" not in record

    def test_fault_is_rendered_first(self) -> None:
        """Faults are parsed from their text form."""
        records = parse_text(Fault("boom"))

        assert records[0]["content"] == "ERROR: boom"
        assert records[-1]["content"] == "No stack trace"


class TestRenderText:
    """Tests for render_text."""

    def test_string_verbatim(self) -> None:
        """Strings are written unchanged."""
        assert render_text("  as is \n") == "  as is \n"

    def test_fault_layout(self) -> None:
        """Faults use the ERROR / STACK TRACE layout."""
        assert render_text(Fault("boom", "at main")) == "ERROR: boom\n\nSTACK TRACE:\nat main"
        assert render_text(Fault("boom")) == "ERROR: boom\n\nSTACK TRACE:\nNo stack trace"

    def test_structures_are_pretty_json(self) -> None:
        """Mappings and lists are indented JSON."""
        assert render_text({"a": 1}) == '{\n  "a": 1\n}'
        assert render_text([1]) == "[\n  1\n]"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, "null"), (True, "true"), (False, "false"), (3.0, "3"), (2.5, "2.5"), (7, "7")],
    )
    def test_scalars(self, value, expected: str) -> None:
        """Scalars use JSON-style spelling."""
        assert render_text(value) == expected


class TestCoercion:
    """Tests for to_text and cell_text."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (-4.0, "-4"),
            (Message("hi"), "hi"),
            (Fault("bad", error_type="ValueError"), "ValueError: bad"),
            ([1, "a"], '[1,"a"]'),
        ],
    )
    def test_to_text(self, value, expected: str) -> None:
        """Generic coercion rules."""
        assert to_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.1, "0.1"),
            (123.456, "123.456"),
            (0.00001, "0.00001"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (1.5e-10, "1.5e-10"),
            (-2.5e-8, "-2.5e-8"),
            (1e16, "10000000000000000"),
            (1e21, "1e+21"),
            (1.5e21, "1.5e+21"),
            (-0.0, "0"),
        ],
    )
    def test_float_spelling(self, value: float, expected: str) -> None:
        """Floats use exponent form below 1e-6 and from 1e21 upward."""
        assert to_text(value) == expected

    def test_cell_text_empties_none(self) -> None:
        """None cells are empty rather than null."""
        assert cell_text(None) == ""
        assert cell_text({"k": 1}) == '{"k":1}'
        assert cell_text(False) == "false"
