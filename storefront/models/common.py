"""Response envelope shared by every endpoint"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from .cart import utcnow

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response model"""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)


class ListResponse(BaseModel, Generic[T]):
    """List response carrying the number of returned entries"""
    success: bool = True
    data: list[T] = Field(default_factory=list)
    count: int = 0
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
