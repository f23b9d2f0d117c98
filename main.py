# main.py
from contextlib import asynccontextmanager
from typing import Optional
import routes
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.http import close_http_client, get_http_client
from core.capability import PermissionGate
from core.notifier import NoticeBoard
from service.job_registry import JobRegistry
from util import functions
from util.enums import Environment, Color
from util.logger import init_logger


def _default_registry(notices: NoticeBoard) -> JobRegistry:
    gate = PermissionGate(
        settings.CONSOLE_ROLE, functions.parse_csv(settings.CONSOLE_PERMISSIONS)
    )
    return JobRegistry.build(
        get_http_client(),
        gate,
        notices,
        poll_interval=settings.poll_interval_seconds,
    )


def create_app(
    registry: Optional[JobRegistry] = None, notices: Optional[NoticeBoard] = None
) -> FastAPI:
    board = notices or NoticeBoard(capacity=settings.NOTICE_HISTORY)

    @asynccontextmanager
    async def lifespan(fastApi: FastAPI):
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        jobs = registry or _default_registry(board)
        fastApi.state.registry = jobs
        fastApi.state.notices = board
        # First status of every kind, regardless of what it turns out to be
        await jobs.mount_all()
        print(f"{Color.BLUE}Console Started{Color.RESET}")

        try:
            yield
        finally:
            try:
                await jobs.close_all()
            finally:
                await close_http_client()
            print(f"{Color.RED}Console Shutdown{Color.RESET}")

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOWED_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    routes.register_routes(app)
    return app


app: FastAPI = create_app()

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=reload)
