# util/functions.py
from datetime import datetime
from util.constants import TIME_FORMAT


def clamp_progress(value: int | float | None) -> int:
    """
    - Display-only clamp of a reported progress value into [0, 100].
    - The raw value stays untouched on the cached status.
    """
    if value is None:
        return 0
    return max(0, min(100, int(round(value))))


def format_time(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime(TIME_FORMAT)


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
