"""Consumer management routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db
from api.responses import ERROR_RESPONSES, MessageResponse
from domain.mappers import ConsumerMapper
from domain.schemas.consumer_schemas import (
    ConsumerCreate,
    ConsumerUpdate,
    ConsumerResponse,
)
from services import ConsumerService

router = APIRouter(prefix="/consumers", tags=["Consumers"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealbills.api.consumers")


@router.get("", response_model=List[ConsumerResponse])
def list_consumers(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
):
    """List consumers by name with their bill counts, optionally by active flag"""
    consumers = ConsumerService.list_consumers(db, is_active)
    return [ConsumerMapper.to_response(c, count) for c, count in consumers]


@router.post("", response_model=ConsumerResponse, status_code=status.HTTP_201_CREATED)
def create_consumer(payload: ConsumerCreate, db: Session = Depends(get_db)):
    """Create a consumer with a unique name"""
    consumer = ConsumerService.create_consumer(db, payload)
    return ConsumerMapper.to_response(consumer)


@router.get("/{consumer_id}", response_model=ConsumerResponse)
def get_consumer(consumer_id: UUID, db: Session = Depends(get_db)):
    """Get a consumer with its bill count"""
    consumer, count = ConsumerService.get_consumer(db, consumer_id)
    return ConsumerMapper.to_response(consumer, count)


@router.put("/{consumer_id}", response_model=ConsumerResponse)
def update_consumer(
    consumer_id: UUID, payload: ConsumerUpdate, db: Session = Depends(get_db)
):
    """Update a consumer. Send ``isActive: false`` to deactivate."""
    consumer, count = ConsumerService.update_consumer(db, consumer_id, payload)
    return ConsumerMapper.to_response(consumer, count)


@router.delete("/{consumer_id}", response_model=MessageResponse)
def delete_consumer(consumer_id: UUID, db: Session = Depends(get_db)):
    """Delete a consumer that has no bills"""
    ConsumerService.delete_consumer(db, consumer_id)
    return {"message": "Consumer deleted successfully"}
