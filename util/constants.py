from typing import Final


class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    JOBS = V1 + "/jobs"
    JOB = JOBS + "/{kind}"
    JOB_ACTION = JOB + "/actions/{action}"
    NOTICES = V1 + "/notices"


DEFAULT_POLL_INTERVAL_MS: Final[int] = 2000
DEFAULT_NOTICE_HISTORY: Final[int] = 200
TIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
