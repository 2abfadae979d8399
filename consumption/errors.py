"""Domain errors raised by the aggregation layer.

Row-level parse problems are not exceptions; they are collected on
``ParseResult.errors``. File read failures propagate as the platform error.
"""

from __future__ import annotations


class ConsumptionError(Exception):
    """Base exception for consumption dataset failures."""


class UnknownFieldError(ConsumptionError):
    """Raised when a record field name is not part of the schema."""


class InvalidValueError(ConsumptionError):
    """Raised when a numeric field holds text that is not a finite number."""

    def __init__(self, field: str, row: int, value: str) -> None:
        super().__init__(
            f"Invalid numeric value for {field} at record {row}: {value!r}. "
            "Fix the value or aggregate with on_invalid='skip'."
        )
        self.field = field
        self.row = row
        self.value = value


class EmptyDatasetError(ConsumptionError):
    """Raised when there are no values to average."""
