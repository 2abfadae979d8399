import csv

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from consumption import loader
from consumption.loader import decode_csv_bytes, load_csv
from consumption.models import ConsumptionRecord
from consumption.parse import parse_csv
from consumption.paths import PACKAGE_DIR, retrieve_file_path


def test_retrieve_file_path_is_absolute_and_unchecked():
    path = retrieve_file_path("no-such-file.csv")
    assert path.is_absolute()
    assert path.parent == PACKAGE_DIR
    assert not path.exists()


def test_load_csv_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv(tmp_path / "missing.csv")


def test_parse_round_trip_fixture(round_trip_csv):
    result = parse_csv(load_csv(round_trip_csv))

    assert [r.zip for r in result.records] == ["10001", "10002", "10003"]
    assert result.records[0] == ConsumptionRecord(
        zip="10001",
        building_type="Residential",
        consumption_therms="15",
        consumption_giga_joules="1.58",
        source="National Grid",
    )
    assert result.errors == ()
    assert result.meta.fields == (
        "zip",
        "buildingType",
        "consumptionTherms",
        "consumptionGigaJoules",
        "source",
    )
    assert result.meta.delimiter == ","
    assert result.meta.delimiter_sniffed is True
    assert result.meta.linebreak == "\n"


def test_values_stay_text():
    result = parse_csv("zip,buildingType,consumptionTherms,consumptionGigaJoules,source\n"
                       "00501,Residential,not-a-number,,ConEd\n")
    record = result.records[0]
    assert record.zip == "00501"
    assert record.consumption_therms == "not-a-number"
    assert record.consumption_giga_joules == ""


def test_records_are_immutable(round_trip_csv):
    result = parse_csv(load_csv(round_trip_csv))
    with pytest.raises(ValidationError):
        result.records[0].source = "ConEd"


def test_malformed_rows_are_reported_not_fatal(malformed_csv):
    result = parse_csv(load_csv(malformed_csv))

    assert [r.zip for r in result.records] == ["10001", "10002", "10003", "10005"]
    assert [(e.code, e.row) for e in result.errors] == [
        ("TooFewFields", 1),
        ("TooManyFields", 2),
        ("MalformedQuotes", 3),
    ]
    assert result.meta.linebreak == "\r\n"

    short = result.records[1]
    assert short.consumption_therms == "25"
    assert short.consumption_giga_joules == ""
    assert short.source == ""

    long = result.records[2]
    assert long.source == "National Grid"


def test_unterminated_quote_is_reported():
    text = (
        "zip,buildingType,consumptionTherms,consumptionGigaJoules,source\n"
        '10001,"Residential,15,1.58,National Grid\n'
        "10002,Commercial,25,2.64,ConEd\n"
    )
    result = parse_csv(text, delimiter=",")

    assert result.records == ()
    assert len(result.errors) == 1
    assert result.errors[0].type == "Quotes"
    assert result.errors[0].row == 0


def test_blank_lines_and_trailing_newline_add_no_records():
    text = (
        "zip,buildingType,consumptionTherms,consumptionGigaJoules,source\n"
        "10001,Residential,15,1.58,National Grid\n"
        "\n"
        "10002,Commercial,25,2.64,ConEd\n"
        "\n"
    )
    result = parse_csv(text)
    assert len(result.records) == 2
    assert result.errors == ()


def test_missing_header_column_reported_once():
    text = "zip,consumptionTherms,source\n10001,15,ConEd\n10002,20,ConEd\n"
    result = parse_csv(text, delimiter=",")

    assert [(e.code, e.row) for e in result.errors] == [
        ("MissingColumn", None),
        ("MissingColumn", None),
    ]
    assert result.records[0].building_type == ""
    assert result.records[1].consumption_therms == "20"


def test_semicolon_delimiter_is_sniffed():
    text = (
        "zip;buildingType;consumptionTherms;consumptionGigaJoules;source\n"
        "10001;Residential;15;1.58;National Grid\n"
        "10002;Commercial;25;2.64;ConEd\n"
    )
    result = parse_csv(text)
    assert result.meta.delimiter == ";"
    assert [r.source for r in result.records] == ["National Grid", "ConEd"]


def test_bom_is_stripped_from_header():
    text = "\ufeffzip,buildingType,consumptionTherms,consumptionGigaJoules,source\n10001,R,1,2,ConEd\n"
    result = parse_csv(text)
    assert result.meta.fields[0] == "zip"
    assert result.records[0].zip == "10001"


def test_empty_input():
    result = parse_csv("")
    assert result.records == ()
    assert result.errors == ()
    assert result.meta.fields == ()
    assert result.meta.delimiter_sniffed is False


def test_decode_csv_bytes_handles_utf8_bom_and_latin1():
    assert decode_csv_bytes("zip\n10001\n".encode("utf-8-sig")) == "zip\n10001\n"

    raw = "zip,buildingType\n10001,Caf\xe9 de la Montr\xe9al\n".encode("latin-1")
    text = decode_csv_bytes(raw)
    assert text.startswith("zip,buildingType\n10001,")


def test_load_csv_keeps_crlf_inside_quoted_field(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(
        b"zip,buildingType,consumptionTherms,consumptionGigaJoules,source\r\n"
        b'10001,"Two\r\nLines",15,1.58,National Grid\r\n'
    )
    text = load_csv(path)
    assert text == path.read_bytes().decode("utf-8")

    result = parse_csv(text)
    assert result.meta.linebreak == "\r\n"
    assert result.records[0].building_type == "Two\r\nLines"
    assert result.errors == ()


def test_linebreak_comes_from_header_not_quoted_values():
    text = (
        "zip,buildingType,consumptionTherms,consumptionGigaJoules,source\n"
        '10001,"Mixed\rUse",15,1.58,National Grid\n'
    )
    result = parse_csv(text, delimiter=",")
    assert result.meta.linebreak == "\n"
    assert result.records[0].building_type == "Mixed\rUse"


def test_oversized_field_is_not_a_quote_error():
    text = (
        "zip,buildingType,consumptionTherms,consumptionGigaJoules,source\n"
        "10001," + "x" * (csv.field_size_limit() + 1) + ",15,1.58,National Grid\n"
        "10002,Commercial,25,2.64,ConEd\n"
    )
    result = parse_csv(text, delimiter=",")

    assert [(e.type, e.code, e.row) for e in result.errors] == [
        ("FieldMismatch", "FieldTooLarge", 0)
    ]
    assert [r.zip for r in result.records] == ["10002"]


def test_decode_csv_bytes_undetected_encoding_replaces(monkeypatch):
    class _NoMatch:
        def best(self):
            return None

    monkeypatch.setattr(loader, "from_bytes", lambda raw: _NoMatch())
    with capture_logs() as logs:
        text = decode_csv_bytes(b"zip,source\n10001,Con\xffEd\n")

    assert text == "zip,source\n10001,Con\ufffdEd\n"
    assert [entry["event"] for entry in logs if entry["log_level"] == "warning"] == [
        "csv_encoding_undetected"
    ]
