# config/http.py
from typing import Optional
import httpx
from config.settings import settings

_client: Optional[httpx.AsyncClient] = None

SESSION_COOKIE_NAME = "session_id"


def get_http_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        cookies = {}
        if settings.BACKEND_SESSION_COOKIE:
            cookies[SESSION_COOKIE_NAME] = settings.BACKEND_SESSION_COOKIE
        _client = httpx.AsyncClient(
            base_url=settings.BACKEND_API_URL,
            timeout=httpx.Timeout(settings.REQUEST_TIMEOUT_SECONDS, connect=5.0),
            cookies=cookies,
            headers={"Accept": "application/json"},
        )
    return _client


async def close_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
