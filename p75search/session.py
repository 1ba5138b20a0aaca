"""
Session state for one user working against one uploaded file.

A SearchSession is the only mutable state in the service. The dataset is
replaced wholesale on each successful upload; the search text, results and
selections are recomputed synchronously by each operation.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from .ingest import IngestError, ingest_csv_bytes
from .models import Row
from .rules import MODES, MULTI_MODE, SINGLE_MODE, TOKEN_ERROR_SECONDS, TOKEN_KEYS
from .search import find_code, search

logger = logging.getLogger(__name__)


class ModeError(Exception):
    """Raised when an operation belongs to the other selection mode."""


class SearchSession:
    def __init__(
        self,
        mode: str = SINGLE_MODE,
        tolerant_headers: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        if mode not in MODES:
            raise ValueError(f"unknown selection mode {mode!r}")
        self.mode = mode
        self.tolerant_headers = tolerant_headers
        self._clock = clock

        self.dataset: List[Row] = []
        self.loaded = False
        self.file_name: Optional[str] = None
        self.error: Optional[str] = None

        self.query = ""
        self.results: List[Row] = []
        self.pinned: Optional[Row] = None
        self._selections: "OrderedDict[str, Row]" = OrderedDict()

        self._token_error: Optional[str] = None
        self._token_error_until = 0.0

    # --- ingestion ---

    def load(self, file_name: Optional[str], raw: bytes) -> List[Row]:
        try:
            rows = ingest_csv_bytes(file_name, raw, tolerant=self.tolerant_headers)
        except IngestError as exc:
            logger.warning("Upload of %r rejected: %s", file_name, exc.message)
            self.error = exc.message
            raise

        self.file_name = file_name
        self.dataset = rows
        self.loaded = True
        self.error = None
        return rows

    # --- single-pin mode ---

    def type_search(self, text: str) -> List[Row]:
        self.query = text
        self.pinned = None
        self.results = search(self.dataset, text)
        return self.results

    def select(self, code: str) -> Row:
        self._require(SINGLE_MODE)
        row = find_code(self.results, code) or find_code(self.dataset, code)
        if row is None:
            raise LookupError(f"No match found for code: {code}")

        self.pinned = row
        self.query = row.code
        self.results = []
        return row

    # --- multi-pin mode ---

    @property
    def selections(self) -> List[Row]:
        return list(self._selections.values())

    def handle_key(self, key: str, text: str) -> bool:
        """Record the typed text; complete it as a token on a token key."""
        self._require(MULTI_MODE)
        self.query = text
        if key in TOKEN_KEYS:
            return self.complete_token(text)
        return False

    def complete_token(self, token: str) -> bool:
        self._require(MULTI_MODE)
        token = token.strip().strip(",").strip()
        if not token:
            return False

        row = find_code(self.dataset, token)
        if row is None:
            self._token_error = f"No match found for code: {token}"
            self._token_error_until = self._clock() + TOKEN_ERROR_SECONDS
            return False

        key = row.code.lower()
        if key not in self._selections:
            self._selections[key] = row
        self.query = ""
        return True

    def remove(self, code: str) -> bool:
        return self._selections.pop(code.strip().lower(), None) is not None

    @property
    def token_error(self) -> Optional[str]:
        if self._token_error is not None and self._clock() >= self._token_error_until:
            self._token_error = None
        return self._token_error

    def _require(self, mode: str) -> None:
        if self.mode != mode:
            raise ModeError(f"not available in {self.mode} selection mode")

    def snapshot(self) -> Dict[str, object]:
        return {
            "mode": self.mode,
            "file_name": self.file_name,
            "loaded": self.loaded,
            "rows": len(self.dataset),
            "error": self.error,
            "query": self.query,
            "results": self.results,
            "pinned": self.pinned,
            "selections": self.selections,
            "token_error": self.token_error,
        }
