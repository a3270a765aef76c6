"""Shared schema pieces."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    count: Optional[int] = None
