"""
CSV ingestion for the Code/P75 lookup.

Responsibilities:
- file type check
- encoding detection + decoding
- header normalization (BOM, surrounding whitespace)
- locating the Code and P75 columns
- projecting records down to (code, p75) rows, dropping incomplete ones

Every failure is an IngestError carrying a short message that can be shown
to the user as-is.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import List, Sequence, Tuple

from charset_normalizer import from_bytes

from .models import Row
from .rules import BOM, CODE_COLUMN, CSV_DELIMITER, CSV_EXTENSION, VALUE_COLUMN

logger = logging.getLogger(__name__)


class IngestError(Exception):
    message = "Error processing CSV"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class WrongFileType(IngestError):
    message = "Please upload a CSV file"


class UnreadableFile(IngestError):
    message = "Error reading file"


class MalformedCsv(IngestError):
    message = "Error parsing CSV"


class MissingColumns(IngestError):
    message = f'CSV must have "{CODE_COLUMN}" and "{VALUE_COLUMN}" columns'


class NoData(IngestError):
    message = "No data found in CSV file"


class NoValidData(IngestError):
    message = "No valid data found in CSV file"


def check_file_name(file_name: str | None) -> None:
    if not file_name or not file_name.lower().endswith(CSV_EXTENSION):
        raise WrongFileType()


def decode_csv_bytes(raw: bytes) -> str:
    """
    Decode uploaded bytes to text.

    UTF-8 (with or without BOM) is tried first; anything else goes through
    charset-normalizer's best guess. Bytes that decode under neither raise
    UnreadableFile.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise UnreadableFile()

    try:
        text = raw.decode(match.encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise UnreadableFile(f"Error reading file: {exc}") from exc

    logger.info("Decoded upload as %s", match.encoding)
    return text


def normalize_header(header: str) -> str:
    cleaned = header
    if cleaned.startswith(BOM):
        cleaned = cleaned[len(BOM):]
    cleaned = cleaned.strip()
    logger.debug("Raw header: %r -> cleaned: %r", header, cleaned)
    return cleaned


def locate_columns(headers: Sequence[str], tolerant: bool = True) -> Tuple[int, int]:
    """
    Return the (code, p75) column indexes among normalized headers.

    Code must match exactly. P75 matches exactly first; with `tolerant` a
    header that only contains "P75" is accepted as a fallback.
    """
    code_idx = _index_of(headers, lambda h: h == CODE_COLUMN)
    p75_idx = _index_of(headers, lambda h: h == VALUE_COLUMN)
    if p75_idx is None and tolerant:
        p75_idx = _index_of(headers, lambda h: VALUE_COLUMN in h)

    if code_idx is None or p75_idx is None:
        raise MissingColumns(f"{MissingColumns.message}. Found: {', '.join(headers)}")

    logger.info("Found columns: code=%r p75=%r", headers[code_idx], headers[p75_idx])
    return code_idx, p75_idx


def _index_of(headers, predicate):
    for i, header in enumerate(headers):
        if predicate(header):
            return i
    return None


def _field(record: Sequence[str], idx: int) -> str:
    if idx >= len(record) or record[idx] is None:
        return ""
    return str(record[idx]).strip()


def parse_rows(text: str, tolerant: bool = True) -> List[Row]:
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=CSV_DELIMITER, strict=True)

    try:
        records = [record for record in reader if record]
    except csv.Error as exc:
        logger.warning("CSV parsing error at line %d: %s", reader.line_num, exc)
        raise MalformedCsv(f"Error parsing CSV: {exc}") from exc

    if len(records) < 2:
        raise NoData()

    headers = [normalize_header(h) for h in records[0]]
    logger.debug("Available columns: %s", headers)
    code_idx, p75_idx = locate_columns(headers, tolerant=tolerant)

    rows: List[Row] = []
    for record in records[1:]:
        code = _field(record, code_idx)
        p75 = _field(record, p75_idx)
        if code and p75:
            rows.append(Row(code=code, p75=p75))

    if not rows:
        raise NoValidData()

    logger.info("Loaded %d rows (%d dropped)", len(rows), len(records) - 1 - len(rows))
    logger.debug("Sample of processed data: %s", rows[:3])
    return rows


def ingest_csv_bytes(file_name: str | None, raw: bytes, tolerant: bool = True) -> List[Row]:
    check_file_name(file_name)
    return parse_rows(decode_csv_bytes(raw), tolerant=tolerant)
