from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def _valid_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def resolve_timezone() -> str:
    """Best-effort IANA name of the host's local time zone."""
    candidates = []

    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        candidates.append(tz_env)

    etc_timezone = Path("/etc/timezone")
    if etc_timezone.is_file():
        candidates.append(etc_timezone.read_text().strip())

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = str(localtime.resolve())
        if "zoneinfo/" in target:
            candidates.append(target.split("zoneinfo/", 1)[1])

    for name in candidates:
        if name and _valid_zone(name):
            return name
    return "UTC"


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_millis(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def current_time(now: Optional[datetime] = None) -> Dict[str, Any]:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    # truncate to milliseconds so the ISO string and timestamp agree
    moment = moment.replace(microsecond=moment.microsecond // 1000 * 1000)
    return {
        "currentTime": iso_millis(moment),
        "timestamp": (moment - EPOCH) // timedelta(milliseconds=1),
        "timezone": resolve_timezone(),
    }
