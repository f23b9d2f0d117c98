# core/kinds.py
from enum import Enum
from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict, Field


class JobKind(str, Enum):
    NEWS = "news"
    FUND_NEWS = "fund_news"
    REPORT = "report"
    DIPA_FUND = "dipa_fund"
    PROFILE_CHANGE = "profile_change"
    EMBEDDING = "embedding"
    DATA_MART = "data_mart"


class JobEndpoints(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    start: str
    stop: str

    @classmethod
    def under(cls, base: str) -> "JobEndpoints":
        return cls(status=f"{base}/status", start=f"{base}/start", stop=f"{base}/stop")


class JobKindSpec(BaseModel):
    """Everything that differs between the seven monitored backend jobs."""

    model_config = ConfigDict(frozen=True)

    kind: JobKind
    title: str
    endpoints: JobEndpoints
    start_params: Mapping[str, Any] = Field(default_factory=dict)
    capability: str | None = None

    # Backend field names: total_<units_field>, processed_<units_field>
    units_field: str = "investors"
    produced_field: str | None = None
    label_field: str | None = None

    unit_noun: str = "investors"
    produced_noun: str | None = None
    running_label: str = "Collecting"
    phase_labels: Mapping[str, str] = Field(default_factory=dict)
    completed_message: str = "Collection finished."

    # Fresh restart offered next to resume for a resumable job
    allow_fresh_restart: bool = False
    # Server enforces one run per day; last_collection_date is shown
    once_per_day: bool = False


NEWS = JobKindSpec(
    kind=JobKind.NEWS,
    title="News collection",
    endpoints=JobEndpoints(
        status="/api/collect-news/status",
        start="/api/collect-news",
        stop="/api/collect-news/stop",
    ),
    start_params={"limit": 20},
    produced_field="collected_articles",
    produced_noun="articles collected",
    completed_message="News collection finished.",
    once_per_day=True,
)

FUND_NEWS = JobKindSpec(
    kind=JobKind.FUND_NEWS,
    title="Fund news collection",
    endpoints=JobEndpoints(
        status="/api/collect-fund-news/status",
        start="/api/collect-fund-news",
        stop="/api/collect-fund-news/stop",
    ),
    start_params={"limit_per_fund": 3},
    capability="collect_fund_news",
    units_field="funds",
    unit_noun="funds",
    produced_field="collected_articles",
    produced_noun="articles collected",
    completed_message="Fund news collection finished.",
)

REPORT = JobKindSpec(
    kind=JobKind.REPORT,
    title="Report collection",
    endpoints=JobEndpoints.under("/api/report-collection"),
    capability="access_report_collection",
    produced_field="collected_reports",
    produced_noun="reports collected",
    label_field="current_investor_name",
    completed_message="Report collection finished.",
)

DIPA_FUND = JobKindSpec(
    kind=JobKind.DIPA_FUND,
    title="DIPA fund sync",
    endpoints=JobEndpoints.under("/api/dipa-fund-collection"),
    capability="collect_dipa_fund_info",
    produced_field="updated_funds",
    produced_noun="funds updated",
    label_field="current_investor_name",
    completed_message="DIPA fund sync finished.",
)

PROFILE_CHANGE = JobKindSpec(
    kind=JobKind.PROFILE_CHANGE,
    title="Profile change detection",
    endpoints=JobEndpoints.under("/api/profile-management"),
    capability="access_profile_management",
    produced_field="changed_investors",
    produced_noun="profiles changed",
    label_field="current_investor_name",
    running_label="Detecting",
    phase_labels={"detecting": "Detecting changes", "processing": "Processing changes"},
    completed_message="Profile change detection finished.",
)

EMBEDDING = JobKindSpec(
    kind=JobKind.EMBEDDING,
    title="Embedding & vector DB build",
    endpoints=JobEndpoints.under("/api/profile-management/embedding-builder"),
    capability="access_profile_management",
    produced_field="successful_embeddings",
    produced_noun="embeddings built",
    label_field="current_investor_name",
    running_label="Processing",
    phase_labels={"embedding": "Generating embeddings", "vector_db": "Writing vector DB"},
    completed_message="Embedding and vector DB build finished.",
)

DATA_MART = JobKindSpec(
    kind=JobKind.DATA_MART,
    title="Data mart collection",
    endpoints=JobEndpoints.under("/api/data-mart/collection"),
    capability="collect_data_mart",
    label_field="current_investor_name",
    completed_message="Data mart collection finished.",
)

JOB_KINDS: tuple[JobKindSpec, ...] = (
    NEWS,
    FUND_NEWS,
    REPORT,
    DIPA_FUND,
    PROFILE_CHANGE,
    EMBEDDING,
    DATA_MART,
)
