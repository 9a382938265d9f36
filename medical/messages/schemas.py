"""
Message Schemas - sending and reading direct messages.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core.schemas import CamelModel


class MessageCreate(CamelModel):
    """
    Message Creation Schema

    Fields:
    - receiver_id: User ID of the recipient
    - content: Message body (1-1000 characters)
    """
    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=1000)


class MessageResponse(CamelModel):
    """
    Message Response Schema - Used when returning message data
    """
    id: int
    content: str
    sent_at: datetime
    is_read: bool
    read_at: Optional[datetime] = None
    sender_id: str
    sender_name: str
    receiver_id: str
    receiver_name: str
