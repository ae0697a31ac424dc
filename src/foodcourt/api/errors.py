"""Exception-to-status mapping for the FoodCourt API.

Protean's handlers are registered first; the handlers below take over for
the classes the foodcourt domain raises so each maps to one status code.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from foodcourt.exceptions import ForbiddenError


def _detail(exc: Exception):
    messages = getattr(exc, "messages", None)
    return messages or str(exc)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": _detail(exc)})


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": _detail(exc)})


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": str(exc)})


async def _conflict(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={"error": _detail(exc), "type": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)
    app.add_exception_handler(ForbiddenError, _forbidden)
    # InvalidTransitionError and CartConflictError resolve here through their base class
    app.add_exception_handler(InvalidOperationError, _conflict)
