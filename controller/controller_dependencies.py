# controller/controller_dependencies.py
from fastapi import Path, Request
from core.notifier import NoticeBoard
from core.view import JobMonitorView
from service.job_registry import JobRegistry
from util.enums import ErrorMessage
from util.errors import AppError


def get_job_registry(request: Request) -> JobRegistry:
    return request.app.state.registry


def get_notice_board(request: Request) -> NoticeBoard:
    return request.app.state.notices


def get_job_view(request: Request, kind: str = Path(...)) -> JobMonitorView:
    registry = get_job_registry(request)
    if kind not in registry:
        raise AppError(
            ErrorMessage.UNKNOWN_JOB_KIND.value.message,
            ErrorMessage.UNKNOWN_JOB_KIND.value.http_status,
        )
    return registry.view(kind)
