import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobbot.config import settings
from jobbot.database import init_db
from jobbot.errors import JobBotError
from jobbot.routers import applications, companies, cover_letters, dashboard, jobs, pipeline
from jobbot.routers import settings as settings_router
from jobbot.utils.logger import setup_logging

logger = logging.getLogger("jobbot")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    init_db(settings.db_path)
    logger.info("Database ready at %s", settings.db_path)
    yield


app = FastAPI(
    title="Job Bot",
    description="Personal job-application tracker with AI scoring and ingestion",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JobBotError)
async def jobbot_error_handler(request: Request, exc: JobBotError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    extra = {k: v for k, v in exc.extra.items() if v is not None}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, **extra})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
    )


# pipeline routes are registered before jobs so /jobs/discover etc. win over /jobs/{job_id}
app.include_router(pipeline.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(cover_letters.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(companies.router, prefix=settings.api_prefix)
app.include_router(settings_router.router, prefix=settings.api_prefix)
app.include_router(dashboard.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    uvicorn.run("jobbot.main:app", host=settings.host, port=settings.port)
