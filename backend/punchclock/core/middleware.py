import logging
import time
from typing import Awaitable, Callable

from fastapi import HTTPException, Request, Response

from punchclock.core.config import AttendanceConfig, settings
from punchclock.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def get_attendance_config() -> AttendanceConfig:
    """Dependency: the analysis configuration built from environment settings."""
    return settings.attendance_config()


def validation_http_error(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": "Data validation failed",
            "violations": exc.violations,
            "violation_count": len(exc.violations),
        },
    )


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s - %d - %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response
