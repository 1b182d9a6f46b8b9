from pydantic import Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.schemas.common import CamelModel


class ConsumerCreate(CamelModel):
    """Schema for creating a consumer. Presence of ``name`` is checked by the service."""

    name: Optional[str] = Field(None, description="Unique display name")
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


class ConsumerUpdate(CamelModel):
    """Partial update; omitted fields stay unchanged"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None


class ConsumerResponse(CamelModel):
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    bill_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
