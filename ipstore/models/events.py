"""
Event models and schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, IPvAnyAddress, field_validator

from ipstore.config import settings


class RequestEvent(BaseModel):
    """A handled request, identified by its client address"""

    ip: IPvAnyAddress = Field(..., description="Client IP address")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("ip", mode="before")
    @classmethod
    def strip_ip(cls, v):
        """Tolerate surrounding whitespace in addresses"""
        if isinstance(v, str):
            return v.strip()
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "ip": "192.168.1.1",
                "timestamp": "2025-10-16T10:30:00Z",
            }
        }


class BatchEventRequest(BaseModel):
    """Batch event submission"""

    events: List[RequestEvent] = Field(..., max_length=settings.MAX_BATCH_SIZE)


class EventResponse(BaseModel):
    """Event submission response"""

    success: bool
    event_id: Optional[str] = None
    message: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class RankedAddress(BaseModel):
    """One row of the Top-K table"""

    rank: int
    ip: str
    count: int


class TopKResponse(BaseModel):
    """Top-K most active addresses response"""

    k: int
    occupancy: int
    distinct: int
    total: int
    items: List[RankedAddress]
    timestamp: datetime = Field(default_factory=datetime.utcnow)
