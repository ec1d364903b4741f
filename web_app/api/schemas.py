"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten, stored as given", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "example.com"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    url: str = Field(..., description="The original long URL")
    key: str = Field(..., description="The 8 character hex key")
    short_url: str = Field(..., description="The complete short URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path",
                    "key": "1a2b3c4d",
                    "short_url": "http://localhost:8080/go/1a2b3c4d",
                }
            ]
        }
    }
