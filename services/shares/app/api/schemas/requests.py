"""
Request schemas for share API.

Defines Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class CreateShareRequest(BaseModel):
    """Request model for creating a new share."""

    filename: str | None = Field(None, description="Diagram file name", max_length=255)
    content: str | None = Field(None, description="Diagram content")
    description: str | None = Field(None, description="Optional share description", max_length=1000)
    public: bool = Field(False, description="Publish the gist publicly (GitHub only)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "filename": "diagram.json",
                "content": '{"nodes": [], "edges": []}',
                "description": "Order flow",
            }
        }
    }


class UpdateShareRequest(BaseModel):
    """Request model for replacing a share file."""

    filename: str | None = Field(None, description="Diagram file name", max_length=255)
    content: str | None = Field(None, description="New diagram content")

    model_config = {
        "json_schema_extra": {
            "example": {
                "filename": "diagram.json",
                "content": '{"nodes": [{"id": "a"}], "edges": []}',
            }
        }
    }
