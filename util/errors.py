# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class JobClientError(Exception):
    """Base for failures talking to the pipeline backend."""

    def __init__(self, kind: str, operation: str, detail: str) -> None:
        self.kind = kind
        self.operation = operation
        self.detail = detail
        super().__init__(f"{kind}.{operation}: {detail}")


class CommunicationError(JobClientError):
    # Network/5xx/garbled body. Says nothing about the job itself.
    pass


class AuthorizationError(JobClientError):
    # Backend answered 401/403 for a command.
    pass
