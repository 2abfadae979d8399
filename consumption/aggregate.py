"""
Averages over numeric record fields.

Values are converted from text at the point of use. A value that is empty,
unparseable, not finite, or written with ``_`` digit separators is invalid:
by default that raises, with ``on_invalid="skip"`` the record is left out
and a warning is logged. An average over nothing raises instead of
returning NaN.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from .errors import EmptyDatasetError, InvalidValueError, UnknownFieldError
from .filters import filter_by_source
from .logging_config import get_logger
from .models import ConsumptionRecord, ParseResult
from .rules import INVALID_VALUE_POLICIES

log = get_logger(__name__)


def _resolve_field(field: str) -> str:
    """Map an attribute name or CSV header alias to the attribute name."""
    fields = ConsumptionRecord.model_fields
    if field in fields:
        return field
    for name, info in fields.items():
        if info.alias == field:
            return name
    raise UnknownFieldError(
        f"Unknown record field {field!r}. Expected one of: {sorted(fields)}."
    )


def _to_float(raw: str) -> Optional[float]:
    # float() also takes "1_000"; digit separators are not valid data
    if "_" in raw:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def average_field(result: ParseResult, field: str, on_invalid: str = "raise") -> float:
    """
    Arithmetic mean of ``field`` across ``result.records``.

    Raises:
        UnknownFieldError: ``field`` is not a record field.
        InvalidValueError: a value is not a finite number and ``on_invalid`` is "raise".
        EmptyDatasetError: no values were left to average.
    """
    if on_invalid not in INVALID_VALUE_POLICIES:
        raise ValueError(
            f"on_invalid must be one of {INVALID_VALUE_POLICIES}, got {on_invalid!r}"
        )
    name = _resolve_field(field)

    values: List[float] = []
    for index, record in enumerate(result.records):
        raw = getattr(record, name)
        value = _to_float(raw)
        if value is None:
            if on_invalid == "raise":
                raise InvalidValueError(name, index, raw)
            log.warning("invalid_value_skipped", field=name, row=index, value=raw)
            continue
        values.append(value)

    if not values:
        raise EmptyDatasetError(
            f"Cannot average {name}: no valid values among {len(result.records)} records."
        )
    return math.fsum(values) / len(values)


def average_therms(result: ParseResult) -> float:
    return average_field(result, "consumption_therms")


def average_giga_joules(result: ParseResult) -> float:
    return average_field(result, "consumption_giga_joules")


def provider_averages(
    result: ParseResult,
    field: str = "consumption_therms",
    on_invalid: str = "raise",
) -> Dict[str, float]:
    """Average of ``field`` per ``source`` label, in first-seen order."""
    labels = dict.fromkeys(record.source for record in result.records)
    return {
        label: average_field(filter_by_source(result, label), field, on_invalid=on_invalid)
        for label in labels
    }
