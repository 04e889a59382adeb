"""Pydantic schemas for requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    Only ``long_url`` is accepted; its content is checked by the service so
    the error messages stay field-keyed.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {"long_url": "https://example.com/very/long/path/to/resource"},
            ]
        },
    )

    long_url: Optional[str] = Field(None, description="The URL to shorten")


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "long_url": "https://example.com/very/long/path",
                    "short_link": "https://short.link/abc123",
                }
            ]
        },
    )

    long_url: str = Field(..., description="The original URL as submitted")
    short_link: str = Field(..., description="The complete short URL")


class AccessEntry(BaseModel):
    """One access in a report."""

    time: datetime = Field(..., description="When the redirect happened")
    referrer: str = Field(..., description="Referer header, or 'none'")
    user_agent: str = Field(..., description="User-Agent header, or 'none'")


class AccessReportResponse(BaseModel):
    """Accesses of a link, newest first."""

    response: List[AccessEntry]


class ErrorsResponse(BaseModel):
    """Field-keyed validation errors, messages joined with ', '."""

    errors: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    details: Optional[Dict[str, str]] = Field(None, description="Detailed error information")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")
