from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

DATE_FORMAT = "%b %d, %Y"


def recipe_date(timestamp: Optional[int]) -> str:
    """Epoch milliseconds to a short UTC date; empty for missing values."""
    if timestamp is None:
        return ""
    try:
        moment = datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return moment.strftime(DATE_FORMAT)
