"""FastAPI exception handlers for error variants.

Endpoints raise ``responses.exception(value)``; the handler below renders the
value with the status code and schema it was registered with.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from anyof.exceptions import AnyOfException, UnknownVariantError
from anyof.logging import get_logger
from anyof.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the generic error envelope as a dict for JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


async def any_of_exception_handler(request: Request, exc: AnyOfException) -> Response:
    """Render the carried variant with its registered status code."""
    response = exc.responses.render(exc.error)
    logger.info(
        "error_variant_returned",
        variant=type(exc.error).__qualname__,
        status_code=response.status_code,
        path=request.url.path,
    )
    return response


async def unknown_variant_handler(request: Request, exc: UnknownVariantError) -> JSONResponse:
    """Return 500 for error values no response description covers.

    Raised by ``ErrorResponses.exception`` when an endpoint produces a variant
    missing from its registrations; the client only sees the generic envelope.
    """
    logger.error("unknown_error_variant", error=exc.message, path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error variant handlers to a FastAPI app instance."""
    app.add_exception_handler(AnyOfException, any_of_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnknownVariantError, unknown_variant_handler)  # type: ignore[arg-type]
