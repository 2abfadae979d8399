from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException
from .aggregate import average_field
from .errors import ConsumptionError
from .filters import filter_by_source
from .loader import decode_csv_bytes
from .models import AverageResponse, HealthResponse
from .parse import parse_csv

app = FastAPI(
    title="consumption-stats",
    description="Provider-filtered averages over utility consumption CSVs",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/average", response_model=AverageResponse)
async def average_consumption(
    file: UploadFile = File(...),
    source: Optional[str] = None,
    field: str = "consumption_therms",
):
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    result = parse_csv(decode_csv_bytes(raw))
    if source is not None:
        result = filter_by_source(result, source)

    try:
        average = average_field(result, field)
    except ConsumptionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return AverageResponse(
        source=source,
        field=field,
        records=len(result.records),
        average=average,
        errors=list(result.errors),
    )
