"""Tests for conversion.engine module."""

import logging

import orjson
import pytest

from error_notifier.conversion import ConversionEngine, ConversionRequest, FileFormat
from error_notifier.conversion.errors import ConfigurationError, FormatError, UnsupportedFormatError
from error_notifier.payloads import Fault, Message


@pytest.fixture
def engine() -> ConversionEngine:
    return ConversionEngine()


class TestParseAndSerialize:
    """Tests for the low-level parse and serialize operations."""

    def test_parse_csv_text(self, engine: ConversionEngine) -> None:
        """CSV text parses into row mappings."""
        assert engine.parse("a,b\n1,2", FileFormat.CSV) == [{"a": "1", "b": "2"}]

    def test_parse_csv_rejects_structures(self, engine: ConversionEngine) -> None:
        """CSV sources must be strings."""
        with pytest.raises(FormatError, match="CSV data must be a string"):
            engine.parse({"a": 1}, "csv")

    def test_parse_invalid_json(self, engine: ConversionEngine) -> None:
        """Malformed JSON sources raise FormatError."""
        with pytest.raises(FormatError):
            engine.parse("{oops", "json")

    def test_parse_unwraps_messages(self, engine: ConversionEngine) -> None:
        """Message payloads are read as their text."""
        assert engine.parse(Message("[1]"), "json") == [1]

    def test_serialize_defaults_to_text(self, engine: ConversionEngine) -> None:
        """Without a target the value is written as text."""
        assert engine.serialize("hello", None) == b"hello"

    def test_serialize_is_utf8(self, engine: ConversionEngine) -> None:
        """Output bytes are UTF-8 encoded."""
        assert engine.serialize("café ✓", "txt") == "café ✓".encode("utf-8")


class TestConvert:
    """Tests for ConversionEngine.convert."""

    def test_direct_csv_flattens(self, engine: ConversionEngine) -> None:
        """Direct CSV output flattens nested objects."""
        output = engine.convert([{"a": 1, "b": {"c": 2, "d": 3}}], ConversionRequest(file_type="csv"))

        assert output.decode("utf-8") == "a,b.c,b.d\n1,2,3\n"

    def test_direct_csv_empty_list(self, engine: ConversionEngine) -> None:
        """An empty list produces the no-data placeholder."""
        assert engine.convert([], ConversionRequest(file_type="csv")) == b"No data"

    def test_text_to_json_lines(self, engine: ConversionEngine) -> None:
        """Multi-line text converts to a JSON array of line records."""
        output = engine.convert("L1\nL2", ConversionRequest(source="txt", target="json"))

        assert orjson.loads(output) == [
            {"lineNumber": 1, "content": "L1", "characterCount": 2},
            {"lineNumber": 2, "content": "L2", "characterCount": 2},
        ]

    def test_json_to_csv_with_headers(self, engine: ConversionEngine) -> None:
        """Caller headers select the CSV columns."""
        request = ConversionRequest(source="json", target="csv", csv_headers=["name"])
        output = engine.convert('[{"name": "Ann", "age": 30}]', request)

        assert output == b"name\nAnn\n"

    def test_csv_headers_apply_to_parsing(self, engine: ConversionEngine) -> None:
        """Caller headers also key headerless CSV input."""
        request = ConversionRequest(source="csv", target="json", csv_headers=["id", "name"])

        assert orjson.loads(engine.convert("1,Ann", request)) == [{"id": "1", "name": "Ann"}]

    def test_csv_to_text(self, engine: ConversionEngine) -> None:
        """CSV converted to text is pretty-printed JSON of the rows."""
        output = engine.convert("a\n1", ConversionRequest(source="csv", target="txt"))

        assert orjson.loads(output) == [{"a": "1"}]
        assert b'\n  {\n    "a": "1"\n  }\n' in output

    def test_direct_mode_does_not_parse(self, engine: ConversionEngine) -> None:
        """Direct text output writes strings verbatim."""
        assert engine.convert('{"a": 1}', ConversionRequest(file_type="txt")) == b'{"a": 1}'

    def test_fault_without_format_is_error_text(self, engine: ConversionEngine) -> None:
        """A fault with no format options is written as error text."""
        output = engine.convert(Fault("boom", "stack here"), ConversionRequest())

        assert output == b"ERROR: boom\n\nSTACK TRACE:\nstack here"

    def test_exception_as_text_is_error_layout(self, engine: ConversionEngine) -> None:
        """A raw exception renders as an error report, not its bare message."""
        output = engine.convert(ValueError("boom"), ConversionRequest(file_type="txt")).decode("utf-8")

        assert output.startswith("ERROR: boom\n\nSTACK TRACE:\n")
        assert "ValueError: boom" in output

    def test_exception_as_json_is_error_record(self, engine: ConversionEngine) -> None:
        """A raw exception renders as an error record in JSON."""
        document = orjson.loads(engine.convert(ValueError("boom"), ConversionRequest(file_type="json")))

        assert document["error"] == "boom"
        assert document["type"] == "Error"
        assert "ValueError: boom" in document["stack"]
        assert document["timestamp"].endswith("Z")
        assert "value" not in document

    def test_invalid_request_rejected(self, engine: ConversionEngine) -> None:
        """Invalid option combinations raise before any conversion."""
        with pytest.raises(ConfigurationError):
            engine.convert({}, ConversionRequest(source="json", target="json"))


class TestRoundTrips:
    """Cross-format properties."""

    def test_json_csv_json_preserves_values(self, engine: ConversionEngine) -> None:
        """Values survive json to csv to json as strings or JSON text."""
        rows = [{"id": 1, "name": "Doe, \"JD\" John", "tags": ["a", "b"], "active": True}]
        csv_bytes = engine.convert(rows, ConversionRequest(source="json", target="csv"))
        json_bytes = engine.convert(
            csv_bytes.decode("utf-8"), ConversionRequest(source="csv", target="json")
        )

        restored = orjson.loads(json_bytes)
        assert len(restored) == 1
        row = restored[0]
        assert row["id"] == "1"
        assert row["name"] == 'Doe, "JD" John'
        assert orjson.loads(row["tags"]) == ["a", "b"]
        assert row["active"] == "true"

    def test_csv_reserialises_identically(self, engine: ConversionEngine) -> None:
        """Parsed CSV rendered again matches the source."""
        source = "id,city\n1,Oslo\n2,Lima\n"

        assert engine.serialize(engine.parse(source, "csv"), "csv").decode("utf-8") == source


class TestCreateFile:
    """Tests for ConversionEngine.create_file."""

    def test_extension_appended(self, engine: ConversionEngine, tmp_path) -> None:
        """A bare name gets the output extension."""
        path = engine.create_file({"a": 1}, ConversionRequest(file_type="csv", file_name="report"), tmp_path)

        assert path == tmp_path / "report.csv"
        assert path.read_text(encoding="utf-8") == "a\n1\n"

    def test_caller_extension_kept(self, engine: ConversionEngine, tmp_path) -> None:
        """A name with its own extension is used as given."""
        path = engine.create_file(
            {"a": 1}, ConversionRequest(file_type="csv", file_name="report.txt"), tmp_path
        )

        assert path.name == "report.txt"
        assert path.read_text(encoding="utf-8") == "a\n1\n"

    def test_directory_created(self, engine: ConversionEngine, tmp_path) -> None:
        """Missing upload directories are created."""
        target_dir = tmp_path / "nested" / "uploads"
        path = engine.create_file("note", ConversionRequest(), target_dir)

        assert path.parent == target_dir
        assert path.suffix == ".txt"
        assert path.read_bytes() == b"note"

    def test_generated_name(self, engine: ConversionEngine, tmp_path) -> None:
        """Without a name one is generated."""
        path = engine.create_file([1], ConversionRequest(file_type="json"), tmp_path)

        assert path.name.startswith("alert-")
        assert path.name.endswith(".json")

    def test_logs_creation(self, engine: ConversionEngine, tmp_path, caplog) -> None:
        """File creation is logged with the format label."""
        with caplog.at_level(logging.INFO, logger="error_notifier.conversion.engine"):
            engine.create_file("x", ConversionRequest(file_type="txt", file_name="log"), tmp_path)

        assert "Created TXT file: log.txt" in caplog.text

    def test_blank_target_writes_nothing(self, engine: ConversionEngine, tmp_path) -> None:
        """A whitespace-only target is reported as an unsupported format."""
        with pytest.raises(UnsupportedFormatError, match="target format"):
            engine.create_file('{"a":1}', ConversionRequest(source="json", target=" "), tmp_path)

        assert list(tmp_path.iterdir()) == []

    def test_invalid_request_writes_nothing(self, engine: ConversionEngine, tmp_path) -> None:
        """Validation happens before the file is written."""
        with pytest.raises(ConfigurationError):
            engine.create_file("x", ConversionRequest(source="txt"), tmp_path)

        assert list(tmp_path.iterdir()) == []
