"""Pydantic models for the platform response envelope

Successful responses are handed to callers as parsed JSON. These models are
used to pull structured error information out of failed responses, so every
field is lenient: a value of the wrong type reads as missing instead of
rejecting the whole body.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError


class ErrorInfo(BaseModel):
    """message/code/details triple, nested under error or flat on the body"""

    model_config = ConfigDict(extra="allow")

    code: str | None = None
    message: str | None = None
    details: Any = None

    @field_validator("code", "message", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        # Numeric codes (e.g. 404) read as text, anything else as missing
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value
        return None


class PageMeta(BaseModel):
    """Pagination fields"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    count: int | None = None
    total: int | None = None
    page: int | None = None
    page_size: int | None = Field(None, alias="pageSize")


class ResponseEnvelope(ErrorInfo):
    """Standard platform response wrapper

    The error key may hold an object or a bare message string. Some endpoints
    put message/code/details on the body itself instead.
    """

    success: Any = None
    data: Any = None
    error: Any = None
    meta: Any = None

    @property
    def error_info(self) -> ErrorInfo | None:
        """Nested structured error, if present"""
        if isinstance(self.error, dict):
            return ErrorInfo.model_validate(self.error)
        return None

    @property
    def error_text(self) -> str | None:
        """Error given as a bare string"""
        if isinstance(self.error, str) and self.error:
            return self.error
        return None

    @property
    def page_meta(self) -> PageMeta | None:
        """Pagination block, None when absent or malformed"""
        if not isinstance(self.meta, dict):
            return None
        try:
            return PageMeta.model_validate(self.meta)
        except PydanticValidationError:
            return None
