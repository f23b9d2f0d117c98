# core/view.py
from typing import Optional
from core.monitor import JobMonitor, MonitorPhase
from model.api import Control, ControlAction, JobView, Panels
from model.job import JobStatus
from model.notice import Notice, NoticeCode, NoticeLevel
from util import functions
from util.enums import StatusColor

ERROR_LABEL = "Error"
COMPLETED_LABEL = "Completed"
IDLE_LABEL = "Idle"


class JobMonitorView:
    """
    Presentation binding for one JobMonitor.

    render() maps the monitor's state to labels, colors, panels and the
    controls currently on offer; dispatch() only forwards actions that
    render() would show, so a hidden control can never reach the backend.
    """

    def __init__(self, monitor: JobMonitor) -> None:
        self._monitor = monitor

    @property
    def monitor(self) -> JobMonitor:
        return self._monitor

    # ---------------- Derived state ----------------

    def _active(self) -> bool:
        return self._monitor.phase is MonitorPhase.ACTIVE

    def status_label(self) -> str:
        status = self._monitor.status
        spec = self._monitor.spec
        if status is None:
            return IDLE_LABEL
        if status.error_message:
            return ERROR_LABEL
        if self._active():
            if status.current_phase and status.current_phase in spec.phase_labels:
                return spec.phase_labels[status.current_phase]
            return spec.running_label
        if status.progress >= 100:
            return COMPLETED_LABEL
        return IDLE_LABEL

    def color(self) -> str:
        status = self._monitor.status
        if status is None:
            return StatusColor.IDLE.value
        if status.error_message:
            return StatusColor.ERROR.value
        if self._active():
            return StatusColor.RUNNING.value
        if status.progress >= 100:
            return StatusColor.COMPLETED.value
        return StatusColor.IDLE.value

    def controls(self) -> list[Control]:
        monitor = self._monitor
        state = monitor.state
        status = monitor.status
        spec = monitor.spec
        locked = not monitor.can_invoke()
        busy = state.is_submitting

        out = [Control(action="refresh", label="Refresh", loading=state.is_refreshing)]
        if self._active():
            out.append(Control(action="stop", label="Stop", locked=locked, loading=busy))
            if state.is_polling:
                out.append(Control(action="stop_monitoring", label="Stop monitoring"))
            return out

        if status is not None and status.can_resume:
            out.append(Control(action="resume", label="Resume", locked=locked, loading=busy))
            if spec.allow_fresh_restart:
                out.append(
                    Control(
                        action="start_fresh",
                        label="Start over",
                        locked=locked,
                        loading=busy,
                    )
                )
        else:
            out.append(Control(action="start", label="Start", locked=locked, loading=busy))
        if state.is_polling:
            out.append(Control(action="stop_monitoring", label="Stop monitoring"))
        return out

    def panels(self) -> Panels:
        status = self._monitor.status
        state = self._monitor.state
        spec = self._monitor.spec
        panels = Panels()
        if state.monitor_error:
            # Monitoring failure, not a job failure
            panels.monitoring = (
                f"Status updates are failing ({state.monitor_error}); "
                "showing the last known status."
            )
        if status is None:
            return panels
        if status.error_message:
            panels.error = status.error_message
        if not status.is_running:
            if status.progress >= 100:
                panels.completed = spec.completed_message
            if status.can_resume:
                panels.resumable = (
                    "The previous run was interrupted. Resume to continue where it stopped."
                )
            if spec.once_per_day and status.last_collection_date:
                panels.daily_limit = (
                    f"Last collected on {status.last_collection_date} (once per day)."
                )
        return panels

    def render(self) -> JobView:
        monitor = self._monitor
        state = monitor.state
        status = monitor.status
        spec = monitor.spec
        phase: MonitorPhase = monitor.phase
        view = JobView(
            kind=monitor.kind,
            title=spec.title,
            phase=phase.value,
            status_label=self.status_label(),
            color=self.color(),
            progress_percent=functions.clamp_progress(status.progress if status else 0),
            is_polling=state.is_polling,
            is_submitting=state.is_submitting,
            is_refreshing=state.is_refreshing,
            panels=self.panels(),
            controls=self.controls(),
        )
        if status is not None:
            self._fill_statistics(view, status)
        return view

    def _fill_statistics(self, view: JobView, status: JobStatus) -> None:
        spec = self._monitor.spec
        view.raw_progress = status.progress
        view.processed_units = status.processed_units
        view.total_units = status.total_units
        view.units_text = f"{status.processed_units} / {status.total_units} {spec.unit_noun}"
        view.produced_count = status.produced_count
        if spec.produced_noun and status.produced_count is not None:
            view.produced_text = f"{status.produced_count} {spec.produced_noun}"
        if status.is_running:
            view.current_unit = status.current_unit_label
        view.start_time = functions.format_time(status.start_time)
        view.end_time = functions.format_time(status.end_time)

    # ---------------- Actions ----------------

    async def dispatch(self, action: ControlAction | str) -> Optional[Notice]:
        offered = {c.action for c in self.controls()}
        if action not in offered:
            return self._unavailable(action)

        monitor = self._monitor
        if action == "refresh":
            return await monitor.refresh()
        if action == "start":
            return await monitor.start(resume=False)
        if action == "resume":
            return await monitor.resume()
        if action == "start_fresh":
            return await monitor.start(resume=False)
        if action == "stop":
            return await monitor.stop()
        if action == "stop_monitoring":
            return monitor.stop_monitoring()
        return self._unavailable(action)

    def _unavailable(self, action: str) -> Notice:
        return Notice(
            kind=self._monitor.kind,
            level=NoticeLevel.warning,
            code=NoticeCode.unavailable,
            message=f"'{action}' is not available right now.",
        )
