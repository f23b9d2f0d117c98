# core/monitor.py
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from core.capability import CapabilityGate, is_allowed
from core.kinds import JobKindSpec
from core.notifier import Notifier
from core.scheduler import RepeatingTimer
from model.job import ALREADY_RUNNING, JobMonitorState, JobStatus
from model.notice import Notice, NoticeCode, NoticeLevel
from service.job_status_client import JobStatusClient
from util.constants import DEFAULT_POLL_INTERVAL_MS
from util.errors import AuthorizationError, JobClientError

logger = logging.getLogger(__name__)


class MonitorPhase(str, Enum):
    IDLE = "idle"
    INACTIVE = "inactive"
    RESUMABLE = "resumable"
    COMPLETED = "completed"
    ERRORED = "errored"
    ACTIVE = "active"


def phase_of(status: Optional[JobStatus], polling: bool = False) -> MonitorPhase:
    if status is None:
        return MonitorPhase.IDLE
    # Polling right after an accepted start counts as active until the
    # server says otherwise.
    if status.is_running or polling:
        return MonitorPhase.ACTIVE
    if status.error_message:
        return MonitorPhase.ERRORED
    if status.progress >= 100:
        return MonitorPhase.COMPLETED
    if status.can_resume:
        return MonitorPhase.RESUMABLE
    return MonitorPhase.INACTIVE


class JobMonitor:
    """
    Client-side view of one backend job kind.

    Flow:
    - mount(): one unconditional status fetch, never gated by polling.
    - start()/resume(): capability check -> POST start -> poll only when the
      server accepted. "running"/"already collected today" are notices, not errors.
    - Poll every interval; each applied snapshot replaces the cache wholesale.
    - A snapshot with is_running=false ends polling (exactly once).
    - stop() asks the server to cancel and polls until it has; stop_monitoring()
      only stops watching.
    - close(): teardown, no further status calls.

    The server owns "is a job running"; the cached status is only a view of it.
    """

    def __init__(
        self,
        client: JobStatusClient,
        gate: CapabilityGate,
        notifier: Optional[Notifier] = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_MS / 1000,
    ) -> None:
        self._client = client
        self._spec: JobKindSpec = client.spec
        self._gate = gate
        self._notifier = notifier
        self._state = JobMonitorState()
        self._timer = RepeatingTimer(
            poll_interval, self._poll, name=f"poll:{self._spec.kind.value}"
        )
        self._issued = 0
        self._applied = 0
        # Reads issued up to here predate the current polling run
        self._polling_from = 0
        self._mounted = False
        self._closed = False

    # ---------------- Read side ----------------

    @property
    def spec(self) -> JobKindSpec:
        return self._spec

    @property
    def kind(self) -> str:
        return self._spec.kind.value

    @property
    def state(self) -> JobMonitorState:
        return self._state

    @property
    def status(self) -> Optional[JobStatus]:
        return self._state.status

    @property
    def phase(self) -> MonitorPhase:
        return phase_of(self._state.status, self._state.is_polling)

    @property
    def closed(self) -> bool:
        return self._closed

    def can_invoke(self) -> bool:
        return is_allowed(self._gate, self._spec.capability)

    def fresh_start_hidden(self) -> bool:
        status = self._state.status
        return (
            status is not None
            and status.can_resume
            and not status.is_running
            and not self._spec.allow_fresh_restart
        )

    # ---------------- Lifecycle ----------------

    async def mount(self) -> Optional[JobStatus]:
        if self._mounted or self._closed:
            return self._state.status
        self._mounted = True
        await self._fetch("mount")
        return self._state.status

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._end_polling("teardown")
        await self._timer.wait()
        logger.info("monitor.closed kind=%s", self.kind)

    # ---------------- Commands ----------------

    async def start(self, resume: bool = False) -> Notice:
        denied = self._check_command("start")
        if denied is not None:
            return denied
        if not resume and self.fresh_start_hidden():
            return self._notice(
                NoticeLevel.warning,
                NoticeCode.unavailable,
                f"{self._spec.title} can only be resumed.",
            )

        self._state.is_submitting = True
        try:
            res = await self._client.start(resume=resume)
        except AuthorizationError:
            return self._denied()
        except JobClientError as e:
            logger.warning("monitor.start.failed kind=%s err=%s", self.kind, e.detail)
            return self._notice(
                NoticeLevel.error,
                NoticeCode.start_failed,
                f"Failed to start {self._spec.title.lower()}.",
            )
        finally:
            self._state.is_submitting = False

        if res.status == ALREADY_RUNNING:
            # Another tab/user/scheduler owns this run; do not adopt it silently.
            return self._notice(
                NoticeLevel.warning,
                NoticeCode.already_running,
                f"{self._spec.title} is already running.",
            )
        if not res.accepted:
            # Server policy (e.g. once per day): relay its message verbatim.
            return self._notice(
                NoticeLevel.warning,
                NoticeCode.refused,
                res.message or f"{self._spec.title} was not started.",
            )

        self._begin_polling()
        logger.info("monitor.started kind=%s resume=%s", self.kind, resume)
        return self._notice(
            NoticeLevel.success,
            NoticeCode.started,
            res.message or f"{self._spec.title} started.",
        )

    async def resume(self) -> Notice:
        return await self.start(resume=True)

    async def stop(self) -> Notice:
        denied = self._check_command("stop")
        if denied is not None:
            return denied

        self._state.is_submitting = True
        try:
            res = await self._client.stop()
        except AuthorizationError:
            return self._denied()
        except JobClientError as e:
            logger.warning("monitor.stop.failed kind=%s err=%s", self.kind, e.detail)
            return self._notice(
                NoticeLevel.error,
                NoticeCode.stop_failed,
                f"Failed to stop {self._spec.title.lower()}.",
            )
        finally:
            self._state.is_submitting = False

        # Cancellation is cooperative; poll until is_running flips, even when
        # the job was found running on mount and never polled here.
        self._begin_polling()
        return self._notice(
            NoticeLevel.success,
            NoticeCode.stop_requested,
            res.message or f"Stop requested for {self._spec.title.lower()}.",
        )

    def stop_monitoring(self) -> Notice:
        self._end_polling("user")
        return self._notice(
            NoticeLevel.info,
            NoticeCode.monitoring_stopped,
            f"Stopped monitoring {self._spec.title.lower()}.",
        )

    async def refresh(self) -> Optional[Notice]:
        if self._closed:
            return None
        if self._state.is_refreshing:
            return self._notice(
                NoticeLevel.info, NoticeCode.busy, "Refresh already in progress."
            )
        self._state.is_refreshing = True
        try:
            ok = await self._fetch("refresh")
        finally:
            self._state.is_refreshing = False
        if ok:
            return None
        return self._notice(
            NoticeLevel.error, NoticeCode.refresh_failed, "Failed to refresh status."
        )

    # ---------------- Polling ----------------

    async def _poll(self) -> None:
        await self._fetch("poll")

    async def _fetch(self, origin: str) -> bool:
        """
        One status read. Returns False only on a monitoring failure.

        Responses carry the sequence number they were issued with; one older
        than the last applied snapshot is dropped.
        """
        self._issued += 1
        seq = self._issued
        try:
            status = await self._client.get_status()
        except JobClientError as e:
            if self._closed:
                return False
            self._state.monitor_error = e.detail
            self._state.failed_polls += 1
            logger.warning(
                "monitor.fetch.failed kind=%s origin=%s n=%d err=%s",
                self.kind,
                origin,
                self._state.failed_polls,
                e.detail,
            )
            return False

        if self._closed:
            return True
        if seq <= self._applied:
            logger.debug("monitor.fetch.stale kind=%s seq=%d applied=%d", self.kind, seq, self._applied)
            return True

        self._applied = seq
        self._state.status = status
        self._state.monitor_error = None
        self._state.failed_polls = 0
        self._state.last_polled_at = datetime.now(timezone.utc)

        if (
            not status.is_running
            and self._state.is_polling
            and seq > self._polling_from
        ):
            self._end_polling("finished")
        return True

    def _begin_polling(self) -> None:
        if self._closed:
            return
        if self._timer.start():
            self._polling_from = self._issued
        self._state.is_polling = True

    def _end_polling(self, reason: str) -> None:
        if self._timer.cancel():
            logger.info("monitor.polling.stopped kind=%s reason=%s", self.kind, reason)
        self._state.is_polling = False

    # ---------------- Helpers ----------------

    def _check_command(self, op: str) -> Optional[Notice]:
        if self._closed:
            return self._notice(
                NoticeLevel.warning, NoticeCode.unavailable, "Monitor is closed."
            )
        if not self.can_invoke():
            logger.info("monitor.%s.denied kind=%s", op, self.kind)
            return self._denied()
        if self._state.is_submitting:
            return self._notice(
                NoticeLevel.info, NoticeCode.busy, "A command is already in progress."
            )
        return None

    def _denied(self) -> Notice:
        return self._notice(
            NoticeLevel.warning,
            NoticeCode.denied,
            f"You do not have permission to control {self._spec.title.lower()}.",
        )

    def _notice(self, level: NoticeLevel, code: NoticeCode, message: str) -> Notice:
        notice = Notice(kind=self.kind, level=level, code=code, message=message)
        if self._notifier is not None:
            self._notifier.notify(notice)
        return notice
