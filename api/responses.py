"""
Standardized API response models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint"""

    error: str = Field(..., description="Error message")
    details: Optional[dict] = Field(None, description="Additional error details")


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    message: str


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation or conflict error"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}
