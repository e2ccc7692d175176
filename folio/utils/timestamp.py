"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def iso_utc(moment: Optional[datetime] = None) -> str:
    """
    UTC timestamp with millisecond precision and a trailing 'Z'.

    Examples:
        iso_utc(datetime(2025, 1, 9, 14, 3, 7, 120000, tzinfo=timezone.utc))
        # "2025-01-09T14:03:07.120Z"
    """
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def filename_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO UTC timestamp safe for filenames (':' and '.' become '-')."""
    return iso_utc(moment).replace(":", "-").replace(".", "-")
