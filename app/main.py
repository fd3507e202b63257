import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import (
    auth, users, departments, sections, levels, courses, units, teachers,
    classes, enrollments, academic_terms, schedules, sessions, attendance,
    record_of_work, students,
)
from app.core.config import settings
from app.core.exceptions import BusinessRuleError
from app.core.logger import setup_logging
from app.db import Base
from app.db.session import engine

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    yield
    engine.dispose()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Invalid request data", "errors": exc.errors()}),
    )


@app.exception_handler(BusinessRuleError)
async def business_rule_handler(request: Request, exc: BusinessRuleError):
    logger.info(f"{request.method} {request.url.path} refused: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/api/health", tags=["health"])
def health():
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(departments.router, prefix="/api/departments", tags=["departments"])
app.include_router(sections.router, prefix="/api/sections", tags=["sections"])
app.include_router(levels.router, prefix="/api/levels", tags=["levels"])
app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
app.include_router(units.router, prefix="/api/units", tags=["units"])
app.include_router(teachers.router, prefix="/api", tags=["teachers"])
app.include_router(classes.router, prefix="/api/classes", tags=["classes"])
app.include_router(enrollments.router, prefix="/api/enrollments", tags=["enrollments"])
app.include_router(academic_terms.router, prefix="/api/academic-terms", tags=["academic-terms"])
app.include_router(schedules.router, prefix="/api/schedules", tags=["schedules"])
app.include_router(sessions.router, prefix="/api", tags=["sessions"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(record_of_work.router, prefix="/api/record-of-work", tags=["record-of-work"])
app.include_router(students.router, prefix="/api/students", tags=["students"])
