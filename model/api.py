# model/api.py
from typing import Literal
from pydantic import BaseModel
from model.notice import Notice

MonitorPhaseName = Literal[
    "idle",
    "inactive",
    "resumable",
    "completed",
    "errored",
    "active",
]

ControlAction = Literal[
    "refresh",
    "start",
    "resume",
    "start_fresh",
    "stop",
    "stop_monitoring",
]


class Control(BaseModel):
    action: ControlAction
    label: str
    loading: bool = False
    locked: bool = False


class Panels(BaseModel):
    error: str | None = None
    monitoring: str | None = None
    resumable: str | None = None
    completed: str | None = None
    daily_limit: str | None = None


class JobView(BaseModel):
    kind: str
    title: str
    phase: MonitorPhaseName
    status_label: str
    color: str
    progress_percent: int
    raw_progress: int | float | None = None
    processed_units: int = 0
    total_units: int = 0
    units_text: str | None = None
    produced_count: int | None = None
    produced_text: str | None = None
    current_unit: str | None = None
    start_time: str = "-"
    end_time: str = "-"
    is_polling: bool = False
    is_submitting: bool = False
    is_refreshing: bool = False
    panels: Panels = Panels()
    controls: list[Control] = []


class CommandResponse(BaseModel):
    notice: Notice | None = None
    view: JobView


class NoticeListResponse(BaseModel):
    notices: list[Notice]
