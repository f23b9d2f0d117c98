# service/job_registry.py
import asyncio
import logging
from typing import Dict, Iterable, List, Optional
import httpx
from core.capability import CapabilityGate
from core.kinds import JOB_KINDS, JobKindSpec
from core.monitor import JobMonitor
from core.notifier import Notifier
from core.view import JobMonitorView
from model.api import JobView
from service.job_status_client import JobStatusClient
from util.constants import DEFAULT_POLL_INTERVAL_MS

logger = logging.getLogger(__name__)


class JobRegistry:
    """
    One independent JobMonitor per job kind.

    Monitors share the HTTP client, gate and notifier but no state and no
    lock: at most one job per kind is enforced by the backend, not here.
    """

    def __init__(self, views: Iterable[JobMonitorView]) -> None:
        self._views: Dict[str, JobMonitorView] = {}
        for view in views:
            if view.monitor.kind in self._views:
                raise ValueError(f"duplicate job kind: {view.monitor.kind}")
            self._views[view.monitor.kind] = view

    @classmethod
    def build(
        cls,
        http: httpx.AsyncClient,
        gate: CapabilityGate,
        notifier: Optional[Notifier] = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_MS / 1000,
        specs: Iterable[JobKindSpec] = JOB_KINDS,
    ) -> "JobRegistry":
        views = []
        for spec in specs:
            client = JobStatusClient(spec, http)
            monitor = JobMonitor(client, gate, notifier, poll_interval=poll_interval)
            views.append(JobMonitorView(monitor))
        return cls(views)

    def kinds(self) -> List[str]:
        return list(self._views)

    def view(self, kind: str) -> JobMonitorView:
        return self._views[kind]

    def views(self) -> List[JobMonitorView]:
        return list(self._views.values())

    def get(self, kind: str) -> JobMonitor:
        return self._views[kind].monitor

    def __contains__(self, kind: object) -> bool:
        return kind in self._views

    def render_all(self) -> List[JobView]:
        return [v.render() for v in self.views()]

    async def mount_all(self) -> None:
        await asyncio.gather(*(v.monitor.mount() for v in self.views()))
        logger.info("registry.mounted kinds=%d", len(self._views))

    async def close_all(self) -> None:
        await asyncio.gather(*(v.monitor.close() for v in self.views()))
        logger.info("registry.closed kinds=%d", len(self._views))
