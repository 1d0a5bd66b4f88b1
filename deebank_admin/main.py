# deebank_admin/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deebank_admin.api import api_router
from deebank_admin.core.config import settings
from deebank_admin.core.i18n import LocalizationMiddleware, request_language, t
from deebank_admin.health import add_health_endpoint
from deebank_admin.services.errors import (
    BackendUnavailable,
    BackOfficeError,
    DuplicateRecord,
    InvalidPhoneNumber,
    InvalidStatusTransition,
    RecordNotFound,
    SessionNotStarted,
    SettlementConflict,
    StaleSearchContext,
)

logger = logging.getLogger(__name__)

# Errors shown as a transient notification, by HTTP status
NOTIFICATION_STATUS = {
    BackendUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    RecordNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateRecord: status.HTTP_409_CONFLICT,
    SettlementConflict: status.HTTP_409_CONFLICT,
    StaleSearchContext: status.HTTP_409_CONFLICT,
    SessionNotStarted: status.HTTP_401_UNAUTHORIZED,
}


def _message(request: Request, exc: BackOfficeError) -> str:
    return t(exc.message_key, request_language(request), **exc.params)


async def field_error_handler(request: Request, exc: BackOfficeError):
    """Validation errors are rendered next to the field, not as a toast"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"field": exc.field, "detail": _message(request, exc)},
    )


async def notification_error_handler(request: Request, exc: BackOfficeError):
    status_code = NOTIFICATION_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"notification": {"level": "error", "message": _message(request, exc)}},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    logger.info(f"Configuring CORS for origins: {settings.CORS_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LocalizationMiddleware)

    app.add_exception_handler(InvalidPhoneNumber, field_error_handler)
    app.add_exception_handler(InvalidStatusTransition, field_error_handler)
    app.add_exception_handler(BackOfficeError, notification_error_handler)

    add_health_endpoint(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
