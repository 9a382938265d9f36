"""
Message Model - direct messages between two users.
"""
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base


class Message(Base):
    """
    Message Model - Stores one message from a sender to a receiver

    Fields:
    - id: Primary key for message
    - sender_id / receiver_id: Foreign keys to User
    - content: Message body
    - sent_at: When the message was sent
    - is_read: Whether the receiver has read it
    - read_at: When the receiver read it
    """
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    content = Column(String(1000), nullable=False)
    sent_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

    def __repr__(self):
        return f"<Message(id={self.id}, sender_id={self.sender_id}, receiver_id={self.receiver_id})>"

    def mark_read(self) -> None:
        """Flag the message as read by its receiver"""
        self.is_read = True
        self.read_at = datetime.now(timezone.utc)
