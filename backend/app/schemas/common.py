from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Envelope used by every read/write endpoint"""
    data: T


class MessageResponse(BaseModel):
    message: str
