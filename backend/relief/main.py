from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relief.api.routes import activity, health, leaves, reports, teachers, timetable
from relief.core.config import get_settings
from relief.core.exceptions import AppError
from relief.core.logging_config import configure_logging
from relief.db.bootstrap import ensure_schema

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_schema()
    yield


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(teachers.router, prefix=settings.api_prefix, tags=["teachers"])
app.include_router(timetable.router, prefix=settings.api_prefix, tags=["timetable"])
app.include_router(leaves.router, prefix=settings.api_prefix, tags=["leaves"])
app.include_router(reports.router, prefix=settings.api_prefix, tags=["reports"])
app.include_router(activity.router, prefix=settings.api_prefix, tags=["activity"])
