# core/scheduler.py
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class RepeatingTimer:
    """
    Cancellable repeating task handle.

    Flow:
    - start() spawns one loop task: sleep(interval) -> await callback() -> repeat.
    - The next sleep only begins after the callback returned, so ticks never overlap.
    - cancel() is safe from inside the callback; the loop exits after the tick.
    - A generation token keeps a loop that is still finishing its last tick
      from continuing after a restart.
    """

    def __init__(self, interval: float, callback: TickCallback, *, name: str = "timer") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = float(interval)
        self._callback = callback
        self._name = name
        self._task: Optional[asyncio.Task] = None
        self._token: Optional[object] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        return (
            self._token is not None
            and self._task is not None
            and not self._task.done()
        )

    def start(self) -> bool:
        """Returns False when already running (never two loops)."""
        if self.active:
            return False
        token = object()
        self._token = token
        self._task = asyncio.get_running_loop().create_task(
            self._run(token), name=self._name
        )
        logger.debug("timer.start name=%s interval=%.3f", self._name, self._interval)
        return True

    async def _run(self, token: object) -> None:
        while self._token is token:
            await asyncio.sleep(self._interval)
            if self._token is not token:
                break
            try:
                await self._callback()
            except asyncio.CancelledError:
                raise
            except Exception:
                # One bad tick must not kill the loop
                logger.exception("timer.tick.error name=%s", self._name)

    def cancel(self) -> bool:
        """Returns True when a running loop was stopped by this call."""
        was_active = self.active
        self._token = None
        task = self._task
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()
        if was_active:
            logger.debug("timer.cancel name=%s", self._name)
        return was_active

    async def wait(self) -> None:
        task = self._task
        if task is None or task is asyncio.current_task():
            return
        await asyncio.wait({task})
