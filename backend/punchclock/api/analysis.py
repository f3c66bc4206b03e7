"""
Analysis API routes.

The routes only translate between HTTP and the orchestrator; every rule lives
in ``punchclock.services``.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from punchclock.core.config import AttendanceConfig
from punchclock.core.exceptions import ValidationError
from punchclock.core.middleware import get_attendance_config, validation_http_error
from punchclock.schemas.attendance import EmployeeRecord
from punchclock.schemas.report import AnalysisReport, EmployeeReport
from punchclock.services.orchestrator import AttendanceOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


class AnalysisRequest(BaseModel):
    employees: list[EmployeeRecord]


@router.post(
    "",
    response_model=AnalysisReport,
    summary="Analyze attendance for a batch of employees",
)
async def analyze_batch(
    body: AnalysisRequest,
    config: AttendanceConfig = Depends(get_attendance_config),
) -> AnalysisReport:
    try:
        return AttendanceOrchestrator(config).analyze(body.employees)
    except ValidationError as exc:
        logger.warning("Rejected batch of %d employee(s): %s", len(body.employees), exc)
        raise validation_http_error(exc)


@router.post(
    "/employee",
    response_model=EmployeeReport,
    summary="Detailed attendance report for one employee",
)
async def analyze_single(
    body: EmployeeRecord,
    config: AttendanceConfig = Depends(get_attendance_config),
) -> EmployeeReport:
    try:
        return AttendanceOrchestrator(config).analyze_employee(body)
    except ValidationError as exc:
        logger.warning("Rejected employee '%s': %s", body.id, exc)
        raise validation_http_error(exc)


@router.get(
    "/config",
    response_model=AttendanceConfig,
    summary="Effective analysis configuration",
)
async def get_config(
    config: AttendanceConfig = Depends(get_attendance_config),
) -> AttendanceConfig:
    return config
