# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers.
"""

from typing import Any, Dict, Union

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
]


class MessageResponse(BaseSchema):
    """Acknowledgement without a payload."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")


class ErrorBody(BaseSchema):
    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Application error code")
    details: Dict[str, Any] = Field(default_factory=dict)
    type: Union[str, None] = Field(default=None, description="Exception class")


class ErrorResponse(BaseSchema):
    """Shape rendered for every application exception."""

    error: ErrorBody
