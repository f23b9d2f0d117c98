# model/notice.py
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field


class NoticeLevel(str, Enum):
    success = "success"
    info = "info"
    warning = "warning"
    error = "error"


class NoticeCode(str, Enum):
    started = "started"
    already_running = "already_running"
    refused = "refused"
    denied = "denied"
    start_failed = "start_failed"
    stop_requested = "stop_requested"
    stop_failed = "stop_failed"
    monitoring_stopped = "monitoring_stopped"
    refresh_failed = "refresh_failed"
    unavailable = "unavailable"
    busy = "busy"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Notice(BaseModel):
    """User-facing toast produced by a console command."""

    kind: str
    level: NoticeLevel
    code: NoticeCode
    message: str
    created_at: datetime = Field(default_factory=_now)
