# service/job_status_client.py
import logging
from typing import Any
import httpx
from fastapi import status
from pydantic import ValidationError
from core.kinds import JobKindSpec
from model.job import JobStatus, StartResponse, StopResponse
from util.errors import AuthorizationError, CommunicationError
from util.timing import timed

logger = logging.getLogger(__name__)


class JobStatusClient:
    """
    Typed wrapper around one job kind's status/start/stop endpoints.

    Stateless: it never caches or infers job state. Every failure surfaces as
    CommunicationError (or AuthorizationError on 401/403) and the caller
    re-polls to learn the truth.
    """

    def __init__(self, spec: JobKindSpec, http: httpx.AsyncClient) -> None:
        self._spec = spec
        self._http = http

    @property
    def spec(self) -> JobKindSpec:
        return self._spec

    @property
    def kind(self) -> str:
        return self._spec.kind.value

    async def get_status(self) -> JobStatus:
        body = await self._request("GET", self._spec.endpoints.status, op="status")
        try:
            return JobStatus.from_payload(
                body,
                units_field=self._spec.units_field,
                produced_field=self._spec.produced_field,
                label_field=self._spec.label_field,
            )
        except ValidationError as e:
            logger.warning("job.status.invalid kind=%s errors=%d", self.kind, e.error_count())
            raise CommunicationError(self.kind, "status", "invalid status payload") from e

    async def start(self, resume: bool = False) -> StartResponse:
        payload = {**self._spec.start_params, "resume": resume}
        with timed(logger, "job.start", kind=self.kind, resume=resume):
            body = await self._request(
                "POST", self._spec.endpoints.start, op="start", json=payload
            )
        try:
            return StartResponse.model_validate(body)
        except ValidationError as e:
            raise CommunicationError(self.kind, "start", "invalid start response") from e

    async def stop(self) -> StopResponse:
        with timed(logger, "job.stop", kind=self.kind):
            body = await self._request("POST", self._spec.endpoints.stop, op="stop", json={})
        try:
            return StopResponse.model_validate(body)
        except ValidationError as e:
            raise CommunicationError(self.kind, "stop", "invalid stop response") from e

    async def _request(
        self, method: str, path: str, *, op: str, json: Any = None
    ) -> dict[str, Any]:
        try:
            res = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning("job.%s.timeout kind=%s", op, self.kind)
            raise CommunicationError(self.kind, op, "request timed out") from e
        except httpx.RequestError as e:
            logger.warning("job.%s.request_error kind=%s err=%s", op, self.kind, type(e).__name__)
            raise CommunicationError(self.kind, op, type(e).__name__) from e

        if res.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            logger.warning("job.%s.forbidden kind=%s status=%d", op, self.kind, res.status_code)
            raise AuthorizationError(self.kind, op, f"HTTP {res.status_code}")

        if res.status_code // 100 != 2:
            logger.warning("job.%s.bad_status kind=%s status=%d", op, self.kind, res.status_code)
            raise CommunicationError(self.kind, op, f"HTTP {res.status_code}")

        try:
            body = res.json()
        except ValueError as e:
            raise CommunicationError(self.kind, op, "response is not JSON") from e
        if not isinstance(body, dict):
            raise CommunicationError(self.kind, op, "unexpected response shape")
        return body
