"""
Customer directory schemas.
"""

from datetime import date
from typing import Union

from pydantic import EmailStr, Field

from app.models.base.enums import Honorific
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = [
    "CustomerCreate",
    "CustomerResponse",
]


class CustomerCreate(BaseCreateSchema):
    honorific: Union[Honorific, None] = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Union[EmailStr, None] = None
    phone_number: Union[str, None] = Field(None, max_length=20)
    identification_number: Union[str, None] = Field(None, max_length=50)
    date_of_birth: Union[date, None] = None
    nationality: Union[str, None] = Field(None, max_length=100)


class CustomerResponse(BaseResponseSchema):
    honorific: Union[str, None] = None
    first_name: str
    last_name: str
    email: Union[str, None] = None
    phone_number: Union[str, None] = None
    identification_number: Union[str, None] = None
    date_of_birth: Union[date, None] = None
    nationality: Union[str, None] = None
