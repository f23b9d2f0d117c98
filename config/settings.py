# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.constants import DEFAULT_NOTICE_HISTORY, DEFAULT_POLL_INTERVAL_MS
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    HOST: str = Field(default="127.0.0.1", validation_alias="HOST")
    PORT: int = Field(default=8080, validation_alias="PORT")

    # CORS
    ALLOWED_ORIGIN: str = Field(
        default="http://localhost:3000", validation_alias="ALLOWED_ORIGIN"
    )

    # Pipeline backend
    BACKEND_API_URL: str = Field(
        default="http://localhost:8000", validation_alias="BACKEND_API_URL"
    )
    BACKEND_SESSION_COOKIE: str | None = Field(
        default=None, validation_alias="BACKEND_SESSION_COOKIE"
    )
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="REQUEST_TIMEOUT_SECONDS"
    )

    # Monitoring
    POLL_INTERVAL_MS: int = Field(
        default=DEFAULT_POLL_INTERVAL_MS, gt=0, validation_alias="POLL_INTERVAL_MS"
    )
    NOTICE_HISTORY: int = Field(
        default=DEFAULT_NOTICE_HISTORY, gt=0, validation_alias="NOTICE_HISTORY"
    )

    # Console operator (resolved by the upstream auth layer)
    CONSOLE_ROLE: str = Field(default="operator", validation_alias="CONSOLE_ROLE")
    CONSOLE_PERMISSIONS: str = Field(default="", validation_alias="CONSOLE_PERMISSIONS")

    # Logging knobs
    LOGGER_NAME: str = "pipeline-console"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="console.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @property
    def poll_interval_seconds(self) -> float:
        return self.POLL_INTERVAL_MS / 1000


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
