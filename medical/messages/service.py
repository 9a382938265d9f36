"""
Message Service - sending, listing and marking direct messages as read.
"""
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..auth.exceptions import InternalErrorException, ResourceNotFoundException
from ..auth.models import User
from ..exceptions import AppException
from .models import Message
from .schemas import MessageCreate, MessageResponse

logger = logging.getLogger(__name__)


def _to_response(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        content=message.content,
        sent_at=message.sent_at,
        is_read=message.is_read,
        read_at=message.read_at,
        sender_id=message.sender_id,
        sender_name=message.sender.full_name,
        receiver_id=message.receiver_id,
        receiver_name=message.receiver.full_name,
    )


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error while trying to {action}: {str(e)}")
        raise InternalErrorException(f"An error occurred while trying to {action}.") from e


def send_message(db: Session, sender_id: str, data: MessageCreate) -> MessageResponse:
    """
    Send a message from the caller to another user.

    Raises:
        AppException: If the caller addresses themselves
        ResourceNotFoundException: If the receiver does not exist
    """
    if data.receiver_id == sender_id:
        raise AppException(status_code=400, detail="You cannot send a message to yourself.")

    receiver = db.query(User.id).filter(User.id == data.receiver_id).first()
    if receiver is None:
        raise ResourceNotFoundException("Receiver not found.")

    message = Message(sender_id=sender_id, receiver_id=data.receiver_id, content=data.content)
    db.add(message)
    _commit(db, "send the message")
    db.refresh(message)
    logger.info(f"Message {message.id} sent from {sender_id} to {data.receiver_id}")
    return _to_response(message)


def list_inbox(db: Session, user_id: str) -> List[MessageResponse]:
    """List messages received by the user, newest first."""
    messages = (
        db.query(Message)
        .options(joinedload(Message.sender), joinedload(Message.receiver))
        .filter(Message.receiver_id == user_id)
        .order_by(Message.sent_at.desc(), Message.id.desc())
        .all()
    )
    return [_to_response(message) for message in messages]


def mark_message_read(db: Session, user_id: str, message_id: int) -> None:
    """
    Mark a received message as read.

    Raises:
        ResourceNotFoundException: If no such message was received by the user
    """
    message = (
        db.query(Message)
        .filter(Message.id == message_id, Message.receiver_id == user_id)
        .first()
    )
    if message is None:
        raise ResourceNotFoundException("Message not found.")

    if not message.is_read:
        message.mark_read()
        _commit(db, "mark the message as read")
