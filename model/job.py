# model/job.py
from datetime import datetime
from typing import Any, Final, Literal
from pydantic import BaseModel, ConfigDict, field_validator

StartStatus = Literal["started", "running", "already_collected_today"]

ALREADY_RUNNING: Final[str] = "running"
ALREADY_COLLECTED_TODAY: Final[str] = "already_collected_today"
REFUSALS: Final[frozenset[str]] = frozenset({ALREADY_RUNNING, ALREADY_COLLECTED_TODAY})


class JobStatus(BaseModel):
    """
    Server snapshot of one job kind. Cached wholesale, never merged.

    Kind-specific extras (changed_investors, failed_investors, ...) are kept.
    """

    model_config = ConfigDict(extra="allow")

    is_running: bool = False
    # Raw as reported; display rounding lives in functions.clamp_progress
    progress: int | float = 0
    total_units: int = 0
    processed_units: int = 0
    produced_count: int | None = None
    current_unit_label: str | None = None
    current_phase: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    error_message: str | None = None
    can_resume: bool = False
    last_collection_date: str | None = None

    @field_validator("progress", "total_units", "processed_units", mode="before")
    @classmethod
    def _none_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @classmethod
    def from_payload(
        cls,
        payload: dict[str, Any],
        *,
        units_field: str,
        produced_field: str | None = None,
        label_field: str | None = None,
    ) -> "JobStatus":
        """
        Normalise a backend status body: total_<units>/processed_<units> become
        total_units/processed_units, the produced field becomes produced_count
        (lists are counted), label_field becomes current_unit_label.
        """
        data = dict(payload)
        data.setdefault("total_units", payload.get(f"total_{units_field}"))
        data.setdefault("processed_units", payload.get(f"processed_{units_field}"))
        if produced_field and "produced_count" not in data:
            produced = payload.get(produced_field)
            if isinstance(produced, (list, tuple)):
                produced = len(produced)
            data["produced_count"] = produced
        if label_field:
            data.setdefault("current_unit_label", payload.get(label_field))
        return cls.model_validate(data)


class StartResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: StartStatus | str
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status not in REFUSALS


class StopResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""


class JobMonitorState(BaseModel):
    # Client-owned; `status` is only ever replaced by a server snapshot.
    status: JobStatus | None = None
    is_polling: bool = False
    is_submitting: bool = False
    is_refreshing: bool = False
    monitor_error: str | None = None
    failed_polls: int = 0
    last_polled_at: datetime | None = None
