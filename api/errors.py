"""
taskery-api/api/errors.py
Gestionnaires d'exceptions globaux : erreurs métier, validation Pydantic et catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.errors import DomainError, ValidationError
from application.errors import (
    EmailAlreadyTakenError,
    TaskAccessDeniedError,
    TaskExistsError,
    TaskNotFoundError,
    TaskOwnerNotFoundError,
    UnauthorizedError,
    UserExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

# L'ordre compte : le premier type correspondant l'emporte
_STATUS_BY_ERROR = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (TaskAccessDeniedError, status.HTTP_403_FORBIDDEN),
    (UserNotFoundError, status.HTTP_404_NOT_FOUND),
    (TaskNotFoundError, status.HTTP_404_NOT_FOUND),
    (TaskOwnerNotFoundError, status.HTTP_404_NOT_FOUND),
    (UserExistsError, status.HTTP_409_CONFLICT),
    (TaskExistsError, status.HTTP_409_CONFLICT),
    (EmailAlreadyTakenError, status.HTTP_409_CONFLICT),
]

INTERNAL_ERROR_MESSAGE = "internal server error"


def status_for(exc: DomainError) -> int:
    """Code HTTP correspondant à une erreur du domaine (500 par défaut)"""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les gestionnaires d'erreurs globaux sur l'application"""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc} (cause: {exc.cause!r})")
            return JSONResponse(status_code=status_code, content={"error": INTERNAL_ERROR_MESSAGE})

        content = {"error": str(exc)}
        if isinstance(exc, ValidationError):
            content["field"] = exc.field
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
