"""
Fixed dataset and provider rules.

Nothing here is read from the environment; these are the only knobs.
"""

DEFAULT_DATASET = "sample.csv"

NATIONAL_GRID = "National Grid"
CON_ED = "ConEd"

# Header names as they appear in the CSV, in source order.
RECORD_COLUMNS = (
    "zip",
    "buildingType",
    "consumptionTherms",
    "consumptionGigaJoules",
    "source",
)

CANDIDATE_DELIMITERS = [",", ";", "\t", "|"]
DEFAULT_DELIMITER = ","

INVALID_VALUE_POLICIES = ("raise", "skip")
