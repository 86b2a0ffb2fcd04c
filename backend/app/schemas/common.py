"""
Common schemas — camelCase base model and the response envelope.
Version: 1.0.0
"""
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{success: true, data: ...}``."""
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    """Error envelope: ``{success: false, error: ..., details?: ...}``."""
    success: bool = False
    error: str
    details: Optional[Any] = None


class FieldError(BaseModel):
    field: str
    message: str
    type: str


def validation_details(errors: List[dict]) -> List[dict]:
    """Flatten pydantic error dicts into ``{field, message, type}`` entries."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        details.append(
            FieldError(
                field=".".join(loc) or "request",
                message=err.get("msg", "Invalid value"),
                type=err.get("type", "value_error"),
            ).model_dump()
        )
    return details
