"""Timestamp helpers shared by the conversion engine and the alert builder."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_isoformat(moment: Optional[datetime] = None) -> str:
    """Render *moment* (default: now) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    value = moment if moment is not None else utc_now()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def local_display_time(moment: Optional[datetime] = None) -> str:
    """Human-readable local time used in alert context blocks."""

    value = moment if moment is not None else datetime.now().astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


__all__ = ["epoch_millis", "local_display_time", "utc_isoformat", "utc_now"]
