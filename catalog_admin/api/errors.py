"""
422 responses: a per-field message map for every kind of invalid input
"""
from collections import defaultdict
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from catalog_admin.exceptions import ValidationFailed

INVALID_MESSAGE = "The given data was invalid."


def _field_name(loc) -> str:
    # ("body", "tags", 0) -> "tags.0"; ("path", "product_id") -> "product_id"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def validation_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = defaultdict(list)
    for error in exc.errors():
        errors[_field_name(error["loc"])].append(error["msg"])
    return dict(errors)


def _invalid(errors: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": INVALID_MESSAGE, "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _invalid(validation_errors(exc))


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return _invalid(exc.errors)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
