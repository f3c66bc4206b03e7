import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from punchclock.api.analysis import router as analysis_router
from punchclock.api.files import router as files_router
from punchclock.core.config import settings
from punchclock.core.middleware import log_requests

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = settings.attendance_config()
    logger.info(
        "Punchclock ready: department=%s, period=%d-%02d, check-in=%s, check-out=%s",
        config.department, config.report_year, config.report_month,
        config.check_in_time, config.check_out_time,
    )

    yield

    logger.info("Shutting down Punchclock backend.")


app = FastAPI(
    title="Punchclock API",
    description="Attendance analysis of punch-clock exports: lateness, absences, half days, punctuality.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(analysis_router, prefix="/api/analysis", tags=["Analysis"])
app.include_router(files_router, prefix="/api/files", tags=["Files"])


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    return {"status": "ok"}
