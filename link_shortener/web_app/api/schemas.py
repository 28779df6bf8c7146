"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: Optional[str] = Field(None, description="The URL to shorten (at most 2048 characters)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class LinkResponse(BaseModel):
    """A created or reused short link."""

    id: int = Field(..., description="Store-assigned identifier")
    short_link: str = Field(..., description="The short code")
    full_link: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    expires_at: datetime = Field(..., description="Expiration timestamp")
    short_url: str = Field(..., description="The complete short URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "short_link": "aZ3kP9qLm2X",
                    "full_link": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z",
                    "expires_at": "2024-01-02T12:00:00Z",
                    "short_url": "https://short.link/aZ3kP9qLm2X",
                }
            ]
        }
    }


class LinkInfoResponse(LinkResponse):
    """Short link with its current status."""

    status: str = Field(..., description="'active' or 'expired'")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    active_links: int
    capacity: int
    remaining_capacity: int
    cache_enabled: bool
