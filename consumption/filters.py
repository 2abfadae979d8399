from __future__ import annotations

from .logging_config import get_logger
from .models import ParseResult
from .rules import CON_ED, NATIONAL_GRID

log = get_logger(__name__)


def filter_by_source(result: ParseResult, label: str) -> ParseResult:
    """
    Keep only records whose ``source`` equals ``label`` exactly (case-sensitive).

    Errors and meta are carried over untouched; record order is preserved.
    """
    kept = tuple(record for record in result.records if record.source == label)
    log.debug("records_filtered", source=label, before=len(result.records), after=len(kept))
    return result.model_copy(update={"records": kept})


def national_only(result: ParseResult) -> ParseResult:
    return filter_by_source(result, NATIONAL_GRID)


def con_ed_only(result: ParseResult) -> ParseResult:
    return filter_by_source(result, CON_ED)
