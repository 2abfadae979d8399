"""
Delimited text -> ParseResult.

Responsibilities:
- delimiter detection
- header row -> field names
- row length enforcement (short rows padded, long rows truncated)
- quote malformation and oversized field reporting

Problems are reported per row on ``ParseResult.errors``; parsing never aborts.
"""

from __future__ import annotations

import csv
import io
from typing import Dict, List, Optional, Tuple

from .logging_config import get_logger
from .models import ConsumptionRecord, ParseError, ParseMeta, ParseResult
from .rules import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER, RECORD_COLUMNS

log = get_logger(__name__)

_BOM = "\ufeff"


def _detect_linebreak(text: str) -> str:
    """Line break ending the first line, so quoted values never decide it."""
    for position, char in enumerate(text):
        if char == "\n":
            return "\n"
        if char == "\r":
            return "\r\n" if text[position + 1:position + 2] == "\n" else "\r"
    return "\n"


def _row_error(exc: csv.Error, row: Optional[int]) -> ParseError:
    message = str(exc)
    if "field larger than field limit" in message:
        return ParseError(
            type="FieldMismatch",
            code="FieldTooLarge",
            message=f"Field too large: {message}",
            row=row,
        )
    return ParseError(
        type="Quotes",
        code="MalformedQuotes",
        message=f"Malformed quoting: {message}",
        row=row,
    )


def _sniff_delimiter(text: str) -> Tuple[str, bool]:
    sample = text[:4096]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return DEFAULT_DELIMITER, False
    return dialect.delimiter, True


def _missing_column_errors(fields: List[str]) -> List[ParseError]:
    return [
        ParseError(
            type="Header",
            code="MissingColumn",
            message=f"Header is missing column {column!r}",
            row=None,
        )
        for column in RECORD_COLUMNS
        if column not in fields
    ]


def _fit_row(row: List[str], width: int, index: int) -> Tuple[List[str], Optional[ParseError]]:
    if len(row) < width:
        error = ParseError(
            type="FieldMismatch",
            code="TooFewFields",
            message=f"Too few fields: expected {width} fields but parsed {len(row)}",
            row=index,
        )
        return row + [""] * (width - len(row)), error
    if len(row) > width:
        error = ParseError(
            type="FieldMismatch",
            code="TooManyFields",
            message=f"Too many fields: expected {width} fields but parsed {len(row)}",
            row=index,
        )
        return row[:width], error
    return row, None


def _to_record(fields: List[str], row: List[str]) -> ConsumptionRecord:
    values: Dict[str, str] = dict(zip(fields, row))
    return ConsumptionRecord.model_validate(
        {column: values.get(column, "") for column in RECORD_COLUMNS}
    )


def parse_csv(text: str, delimiter: Optional[str] = None) -> ParseResult:
    """
    Parse CSV text whose first row is the header.

    Field values are kept as text. ``row`` on each error is the zero-based
    index of the data row it refers to (``None`` for header problems).
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    sniffed = False
    if delimiter is None:
        delimiter, sniffed = _sniff_delimiter(text)

    records: List[ConsumptionRecord] = []
    errors: List[ParseError] = []
    fields: Optional[List[str]] = None
    index = 0

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            # The reader resumes on the next physical line.
            errors.append(_row_error(exc, index if fields is not None else None))
            if fields is not None:
                index += 1
            continue

        if not row:
            continue

        if fields is None:
            fields = row
            errors.extend(_missing_column_errors(fields))
            continue

        row, error = _fit_row(row, len(fields), index)
        if error is not None:
            errors.append(error)
        records.append(_to_record(fields, row))
        index += 1

    result = ParseResult(
        records=tuple(records),
        errors=tuple(errors),
        meta=ParseMeta(
            delimiter=delimiter,
            linebreak=_detect_linebreak(text),
            fields=tuple(fields or ()),
            delimiter_sniffed=sniffed,
        ),
    )
    log.info("csv_parsed", records=len(result.records), errors=len(result.errors), delimiter=delimiter)
    return result
