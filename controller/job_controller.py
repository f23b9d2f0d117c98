# controller/job_controller.py
from typing import get_args
from fastapi import APIRouter, Depends, Query, status
from core.notifier import NoticeBoard
from core.view import JobMonitorView
from model.api import CommandResponse, ControlAction, JobView, NoticeListResponse
from service.job_registry import JobRegistry
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError
from controller.controller_dependencies import (
    get_job_registry,
    get_job_view,
    get_notice_board,
)

job_router = APIRouter()

_ACTIONS = frozenset(get_args(ControlAction))


@job_router.get(InternalURIs.JOBS, response_model=list[JobView])
async def list_jobs(registry: JobRegistry = Depends(get_job_registry)) -> list[JobView]:
    return registry.render_all()


@job_router.get(InternalURIs.JOB, response_model=JobView)
async def get_job(view: JobMonitorView = Depends(get_job_view)) -> JobView:
    return view.render()


@job_router.post(
    InternalURIs.JOB_ACTION,
    response_model=CommandResponse,
    status_code=status.HTTP_200_OK,
)
async def run_action(
    action: str, view: JobMonitorView = Depends(get_job_view)
) -> CommandResponse:
    if action not in _ACTIONS:
        raise AppError(
            ErrorMessage.UNKNOWN_ACTION.value.message,
            ErrorMessage.UNKNOWN_ACTION.value.http_status,
        )
    notice = await view.dispatch(action)
    return CommandResponse(notice=notice, view=view.render())


@job_router.get(InternalURIs.NOTICES, response_model=NoticeListResponse)
async def list_notices(
    kind: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    board: NoticeBoard = Depends(get_notice_board),
) -> NoticeListResponse:
    return NoticeListResponse(notices=board.recent(kind=kind, limit=limit))
