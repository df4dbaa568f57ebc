"""
Manejadores de excepciones: todas las respuestas de error comparten el
envelope {"success": false, "error": ...}.
"""
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from portlink.shared.exceptions.base import AppException

_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_PYDANTIC_VALUE_ERROR = "Value error, "


def validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """[{field, message}] a partir de los errores de pydantic."""
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in _LOCATIONS)
        message = str(err.get("msg", "Invalid value"))
        if message.startswith(_PYDANTIC_VALUE_ERROR):
            message = message[len(_PYDANTIC_VALUE_ERROR):]
        errors.append({"field": field, "message": message})
    return errors


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    content: Dict[str, Any] = {
        "success": False,
        "error": "Validation failed",
        "errors": validation_errors(exc),
    }
    return JSONResponse(status_code=400, content=content)


def register_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(AppException, app_exception_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
