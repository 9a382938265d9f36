"""
Message Router - direct messages between users.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_user
from ..core.security import TokenClaims
from ..database import get_db
from .schemas import MessageCreate, MessageResponse
from .service import list_inbox, mark_message_read, send_message

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(
    message_data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Send a message to another user
    """
    return send_message(db, current_user.user_id, message_data)


@router.get("/inbox", response_model=List[MessageResponse])
def get_inbox(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    List messages received by the caller, newest first
    """
    return list_inbox(db, current_user.user_id)


@router.post("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def read_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Mark a received message as read
    """
    mark_message_read(db, current_user.user_id, message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
