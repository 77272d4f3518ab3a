"""Generic error envelope.

Registered error variants are rendered with their own schemas; this envelope,
{"error": {"code": "...", "message": "..."}}, is only used by the handlers in
anyof.handlers for values no ErrorResponses knows how to render.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Inner error object with a machine-readable code and human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level envelope for errors outside any registered variant set."""

    error: ErrorDetail
