# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class StatusColor(str, Enum):
    ERROR = "#ff4d4f"
    RUNNING = "#1890ff"
    COMPLETED = "#52c41a"
    IDLE = "#d9d9d9"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    UNKNOWN_JOB_KIND = ErrorInfo("Unknown job kind", status.HTTP_404_NOT_FOUND)
    UNKNOWN_ACTION = ErrorInfo("Unknown action", status.HTTP_404_NOT_FOUND)
