from pydantic import Field
from typing import Any, List, Optional

from .pet import CamelModel


class ValidationMessage(CamelModel):
    field: str
    constraint: str
    bound: Optional[float] = None
    rejected_value: Any = None
    message: str


class ProblemDetail(CamelModel):
    """Error body (RFC 7807 style) returned by every error handler"""
    type: str = Field("about:blank", description="Problem type URI")
    title: str = Field(..., description="Short summary of the problem")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human readable explanation")
    timestamp: str = Field(..., description="Response time (ISO format)")
    path: str = Field(..., description="Request path")
    schema_validation_errors: List[ValidationMessage] = Field(default_factory=list)
