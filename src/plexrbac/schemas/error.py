"""Error response schemas.

Every error response uses one envelope: {"error": {"code": "...", "message": "..."}}.
The DomainError handler in main.py builds it from the error's kind and message;
captured stacks are logged, never serialized.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code plus the error's human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
