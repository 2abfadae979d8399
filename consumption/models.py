from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ConsumptionRecord(BaseModel):
    """One data row. Values stay as text until a consumer converts them."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    zip: str = ""
    building_type: str = Field(default="", alias="buildingType")
    consumption_therms: str = Field(default="", alias="consumptionTherms")
    consumption_giga_joules: str = Field(default="", alias="consumptionGigaJoules")
    source: str = ""


class ParseError(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    code: str
    message: str
    row: Optional[int] = Field(default=None, examples=[0])


class ParseMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    delimiter: str = ","
    linebreak: str = "\n"
    fields: Tuple[str, ...] = ()
    delimiter_sniffed: bool = False


class ParseResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: Tuple[ConsumptionRecord, ...] = ()
    errors: Tuple[ParseError, ...] = ()
    meta: ParseMeta = Field(default_factory=ParseMeta)


class AverageResponse(BaseModel):
    source: Optional[str] = Field(default=None, examples=["National Grid"])
    field: str
    records: int = 0
    average: float
    errors: List[ParseError] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
