"""
Direct messages between users, with a read flag only the receiver may set.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from techmatch.api.models import Identity
from techmatch.database.core import to_uuid
from techmatch.database.daos.message_dao import MessagesDao
from techmatch.database.entities.messages import Message
from techmatch.database.helpers.transactionManagement import transactional
from techmatch.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


def serialize_message(message: Message) -> dict:
    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "receiver_id": message.receiver_id,
        "patent_id": message.patent_id,
        "subject": message.subject,
        "content": message.content,
        "is_read": message.is_read,
        "created_at": message.created_at,
    }


@transactional
def create_message(session: Session, receiver_id: UUID, subject: str | None, content: str | None,
                   sender: Identity, patent_id: UUID | None = None) -> dict:
    """
    Send a message. The receiver id is stored as given, without checking that
    the user exists.

    Returns
    -------
    dict
        The serialized message, ``is_read=False``.
    """
    message = Message(
        sender_id=sender.id,
        receiver_id=receiver_id,
        subject=subject,
        content=content,
        patent_id=patent_id,
    )
    MessagesDao().createMessage(session, message)
    logger.info("Message %s from %s to %s", message.id, sender.id, receiver_id)
    return serialize_message(message)


@transactional
def list_messages(session: Session, identity: Identity) -> list[dict]:
    """Every message the caller sent or received, newest first."""
    return [serialize_message(m) for m in MessagesDao().fetchMessagesForUser(session, identity.id)]


@transactional
def mark_read(session: Session, message_id, identity: Identity) -> dict:
    """
    Mark a message as read.

    Raises
    ------
    NotFound
        If the message does not exist.
    Forbidden
        If the caller is not the receiver (the sender cannot mark it read).
    """
    parsed = to_uuid(message_id)
    message_dao = MessagesDao()
    message = message_dao.fetchMessageById(session, parsed) if parsed else None
    if message is None:
        raise NotFound("Message not found")
    if message.receiver_id != identity.id:
        raise Forbidden()
    message_dao.markRead(session, message)
    return serialize_message(message)
