import httpx
import pytest
from core.kinds import EMBEDDING, FUND_NEWS, NEWS, PROFILE_CHANGE
from fakes import status
from service.job_status_client import JobStatusClient
from util.errors import AuthorizationError, CommunicationError


@pytest.mark.asyncio
async def test_status_is_normalised_per_kind(backend, http):
    backend.on(
        "GET",
        FUND_NEWS.endpoints.status,
        {
            "is_running": True,
            "progress": 42.6,
            "total_funds": 50,
            "processed_funds": 21,
            "collected_articles": 130,
            "current_fund_index": 21,
            "start_time": "2026-10-19T09:30:00",
            "end_time": None,
            "error_message": None,
            "can_resume": False,
        },
    )

    result = await JobStatusClient(FUND_NEWS, http).get_status()

    assert result.is_running is True
    assert result.progress == 42.6
    assert (result.processed_units, result.total_units) == (21, 50)
    assert result.produced_count == 130
    assert result.start_time.hour == 9
    # kind-specific extras survive
    assert result.current_fund_index == 21


@pytest.mark.asyncio
async def test_list_valued_produced_field_is_counted(backend, http):
    backend.on(
        "GET",
        PROFILE_CHANGE.endpoints.status,
        status(
            is_running=True,
            current_phase="detecting",
            current_investor_name="Alpha Ventures",
            changed_investors=[{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
        ),
    )

    result = await JobStatusClient(PROFILE_CHANGE, http).get_status()

    assert result.produced_count == 2
    assert result.current_unit_label == "Alpha Ventures"
    assert result.current_phase == "detecting"


@pytest.mark.asyncio
async def test_no_job_yet_is_not_an_error(backend, http):
    backend.on("GET", EMBEDDING.endpoints.status, {"is_running": False, "progress": 0})

    result = await JobStatusClient(EMBEDDING, http).get_status()

    assert result.is_running is False
    assert result.total_units == 0
    assert result.error_message is None


@pytest.mark.asyncio
async def test_start_sends_kind_params_and_resume_flag(backend, http):
    backend.on("POST", NEWS.endpoints.start, {"status": "started", "message": "ok"})

    res = await JobStatusClient(NEWS, http).start(resume=True)

    assert res.accepted is True
    assert backend.bodies("POST", NEWS.endpoints.start) == [{"limit": 20, "resume": True}]


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["running", "already_collected_today"])
async def test_refusals_are_not_accepted(backend, http, reply):
    backend.on("POST", NEWS.endpoints.start, {"status": reply, "message": "no"})

    res = await JobStatusClient(NEWS, http).start()

    assert res.accepted is False
    assert res.message == "no"


@pytest.mark.asyncio
async def test_stop_posts_empty_body(backend, http):
    backend.on("POST", FUND_NEWS.endpoints.stop, {"message": "stopping"})

    res = await JobStatusClient(FUND_NEWS, http).stop()

    assert res.message == "stopping"
    assert backend.bodies("POST", FUND_NEWS.endpoints.stop) == [{}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        httpx.Response(500, json={"detail": "boom"}),
        httpx.Response(404, json={"detail": "missing"}),
        httpx.Response(200, text="<html>proxy error</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"is_running": "maybe"}),
        httpx.ConnectError,
        httpx.ReadTimeout,
    ],
)
async def test_failures_surface_as_communication_errors(backend, http, reply):
    backend.on("GET", NEWS.endpoints.status, reply)

    with pytest.raises(CommunicationError) as info:
        await JobStatusClient(NEWS, http).get_status()

    assert info.value.kind == "news"
    assert info.value.operation == "status"


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [401, 403])
async def test_forbidden_commands_raise_authorization_error(backend, http, code):
    backend.on("POST", NEWS.endpoints.stop, httpx.Response(code, json={"detail": "no"}))

    with pytest.raises(AuthorizationError):
        await JobStatusClient(NEWS, http).stop()
