"""
Fixed lookup rules.

Column names, limits and key bindings live here so the ingest, search and
session layers agree on them.
"""

CODE_COLUMN = "Code"
VALUE_COLUMN = "P75"

CSV_EXTENSION = ".csv"
CSV_DELIMITER = ","
BOM = "\ufeff"

MAX_RESULTS = 10

# multi-pin mode: keys that turn the typed text into a selection
TOKEN_KEYS = ("Enter", " ", ",")
TOKEN_ERROR_SECONDS = 3.0

SINGLE_MODE = "single"
MULTI_MODE = "multi"
MODES = (SINGLE_MODE, MULTI_MODE)
