import io
import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from punchclock.core.config import AttendanceConfig, settings
from punchclock.core.exceptions import ValidationError
from punchclock.core.middleware import get_attendance_config, validation_http_error
from punchclock.schemas.report import UploadAnalysisResponse
from punchclock.services.excel_parser import parse_excel
from punchclock.services.orchestrator import AttendanceOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()

_ALLOWED_EXTENSIONS = {".xlsx", ".xls"}


def _file_extension(filename: str | None) -> str:
    if not filename:
        return ""
    idx = filename.rfind(".")
    return filename[idx:].lower() if idx != -1 else ""


@router.post(
    "/upload",
    response_model=UploadAnalysisResponse,
    summary="Upload a punch sheet and analyze it",
)
async def upload_file(
    file: UploadFile,
    config: AttendanceConfig = Depends(get_attendance_config),
) -> UploadAnalysisResponse:
    ext = _file_extension(file.filename)
    logger.info("Upload: '%s' (extension: '%s')", file.filename, ext)

    if ext not in _ALLOWED_EXTENSIONS:
        logger.warning("Rejected file '%s': unsupported extension '%s'", file.filename, ext)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(_ALLOWED_EXTENSIONS))}",
        )

    content = await file.read()
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size allowed is {settings.MAX_UPLOAD_MB}MB.",
        )
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")

    records, errors = parse_excel(io.BytesIO(content), config)
    logger.info(
        "Parsed '%s': employees=%d, errors=%d", file.filename, len(records), len(errors),
    )
    for err_msg in errors[:5]:
        logger.warning("Parse error [%s]: %s", file.filename, err_msg)
    if len(errors) > 5:
        logger.warning("... and %d more parse errors", len(errors) - 5)

    if not records:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "No usable employee rows found", "errors": errors},
        )

    try:
        report = AttendanceOrchestrator(config).analyze(records)
    except ValidationError as exc:
        raise validation_http_error(exc)

    return UploadAnalysisResponse(
        filename=file.filename or "unknown",
        employee_count=len(records),
        error_count=len(errors),
        errors=errors,
        status="partial" if errors else "success",
        report=report,
    )
