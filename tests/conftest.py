from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def round_trip_csv() -> Path:
    return FIXTURES / "round_trip.csv"


@pytest.fixture
def malformed_csv() -> Path:
    return FIXTURES / "malformed.csv"
