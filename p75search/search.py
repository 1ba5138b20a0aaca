from __future__ import annotations

from typing import List, Optional, Sequence

from .models import Row
from .rules import MAX_RESULTS


def search(rows: Sequence[Row], text: str, limit: int = MAX_RESULTS) -> List[Row]:
    """First `limit` rows whose code contains `text`, case-insensitive, in dataset order."""
    if not text or not text.strip():
        return []

    needle = text.lower()
    results: List[Row] = []
    for row in rows:
        if needle in row.code.lower():
            results.append(row)
            if len(results) >= limit:
                break
    return results


def find_code(rows: Sequence[Row], code: str) -> Optional[Row]:
    wanted = code.strip().lower()
    for row in rows:
        if row.code.lower() == wanted:
            return row
    return None
