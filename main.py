from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from core.health_check import health_check
from core.log import logger
from core.rate_limiter.factory import rate_limiter
from core.rate_limiter.middleware import RateLimitMiddleware
from routes.auth import router as auth_router
from routes.volunteer import router as volunteer_router
from routes.calendar import router as calendar_router
from routes.catalog import router as catalog_router
from routes.volunteer_management import router as volunteer_management_router
from routes.hours import router as hours_router
from routes.onboarding import router as onboarding_router
from routes.communication import router as communication_router
from routes.dashboard import router as dashboard_router
from routes.staff import router as staff_router

from settings import (
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_EXCLUDED_PATHS,
    RATE_LIMIT_PER_MINUTE,
    RATE_LIMIT_WINDOW,
)

VALIDATION_ERROR_MESSAGE = "Validation error on the submitted data"

health_check()

app = FastAPI(title="Volunteer Hub BE")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    RateLimitMiddleware,
    backend=rate_limiter,
    enabled=RATE_LIMIT_ENABLED,
    limit=RATE_LIMIT_PER_MINUTE,
    window=RATE_LIMIT_WINDOW,
    exclude_paths=RATE_LIMIT_EXCLUDED_PATHS,
)

app.include_router(auth_router)
app.include_router(volunteer_router)
app.include_router(calendar_router)
app.include_router(catalog_router)
app.include_router(volunteer_management_router)
app.include_router(hours_router)
app.include_router(onboarding_router)
app.include_router(communication_router)
app.include_router(dashboard_router)
app.include_router(staff_router)


def validation_error_details(errors) -> list[dict]:
    error_details = []
    for error in errors:
        # drop the "body"/"query" prefix fastapi puts in front of the field path
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        field = ".".join(loc) if loc else "general"
        error_details.append({"field": field, "message": error["msg"]})
    return error_details


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return JSONResponse(
        status_code=422,
        content={
            "message": VALIDATION_ERROR_MESSAGE,
            "errors": validation_error_details(exc.errors()),
        },
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "message": VALIDATION_ERROR_MESSAGE,
            "errors": validation_error_details(exc.errors()),
        },
    )


@app.get("/")
async def hello():
    logger.info("hello")
    return {"Hello": "from volunteer hub BE"}


@app.get("/health")
def health():
    return {"status": "ok"}
