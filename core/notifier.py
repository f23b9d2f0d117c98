# core/notifier.py
import logging
from collections import deque
from typing import Deque, List, Optional, Protocol
from model.notice import Notice, NoticeLevel

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NoticeLevel.success: logging.INFO,
    NoticeLevel.info: logging.INFO,
    NoticeLevel.warning: logging.WARNING,
    NoticeLevel.error: logging.ERROR,
}


class Notifier(Protocol):
    def notify(self, notice: Notice) -> None: ...


class NoticeBoard:
    """
    Flow:
    - Every toast a monitor raises lands here and in the log.
    - Keeps the latest `capacity` notices for the console to show.
    """

    def __init__(self, capacity: int = 200) -> None:
        self._notices: Deque[Notice] = deque(maxlen=capacity)

    def notify(self, notice: Notice) -> None:
        self._notices.append(notice)
        logger.log(
            _LOG_LEVELS[notice.level],
            "notice kind=%s code=%s msg=%s",
            notice.kind,
            notice.code.value,
            notice.message,
        )

    def recent(self, kind: Optional[str] = None, limit: int = 50) -> List[Notice]:
        items = [n for n in self._notices if kind is None or n.kind == kind]
        return list(reversed(items[-limit:])) if limit > 0 else []

    def clear(self) -> None:
        self._notices.clear()
