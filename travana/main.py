import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from travana.api.routers import (
    auth,
    car_rentals,
    chat,
    esim,
    events,
    flights,
    hotels,
    music,
    payment,
    saved_trips,
    translate,
    trips,
    weather,
)
from travana.core.config import settings
from travana.core.errors import APIError, ValidationError, error_content
from travana.core.logging import setup_logging
from travana.dependencies import get_store
from travana.domain.repositories import SessionRepository, UserRepository
from travana.domain.services.auth_service import AuthService

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_demo_users:
        store = get_store()
        await AuthService(UserRepository(store), SessionRepository(store)).create_demo_data()
    yield


app = FastAPI(title=settings.project_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    trips,
    chat,
    hotels,
    car_rentals,
    flights,
    events,
    music,
    translate,
    weather,
    esim,
    payment,
    saved_trips,
    auth,
):
    app.include_router(module.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc, APIError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_content(exc.code, str(exc.detail), exc.details),
        )
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = "NOT_FOUND"
    elif exc.status_code < 500:
        code = "VALIDATION_ERROR"
    else:
        code = "INTERNAL_ERROR"
    return JSONResponse(status_code=exc.status_code, content=error_content(code, str(exc.detail)))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    first_error = exc.errors()[0] if exc.errors() else {}
    loc = first_error.get("loc", [])
    # "body.adults" -> "adults"
    path = ".".join(str(item) for item in loc if item not in ("body", "query"))
    details = {"field": path, "reason": first_error.get("msg")}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(ValidationError.code, ValidationError.default_message, details),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("INTERNAL_ERROR", "Internal server error"),
    )
