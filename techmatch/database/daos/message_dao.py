"""
Messages DAO

Purpose
-------
Query interface for direct `Message` rows:
- Create messages
- Fetch by id
- List every message a user sent or received (newest first)
- Flip the read flag
- Totals for the admin statistics view

Error Handling
--------------
Each method logs and re-raises; the ``@transactional`` wrapper converts
SQLAlchemy errors into ``StoreFailure``.
"""

import logging
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from techmatch.database.entities.messages import Message

logger = logging.getLogger(__name__)


class MessagesDao:
    """
    Data Access Object (DAO) for direct messages.
    """

    def createMessage(self, session: Session, message: Message) -> Message:
        """
        Stage a new message.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        message : Message
            Message entity instance to be added.

        Returns
        -------
        Message
            The message object that was added.
        """
        try:
            session.add(message)
            return message
        except Exception as e:
            logger.error("Error in MessagesDao.createMessage. Error Message: %s", e)
            raise e

    def fetchMessageById(self, session: Session, message_id: UUID) -> Message | None:
        try:
            return session.get(Message, message_id)
        except Exception as e:
            logger.error("Error in MessagesDao.fetchMessageById (id=%s): %s", message_id, e)
            raise e

    def fetchMessagesForUser(self, session: Session, user_id: UUID) -> list[Message]:
        """
        Fetch every message where the user is the sender or the receiver.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_id : UUID
            The user whose inbox and outbox are listed.

        Returns
        -------
        list[Message]
            Messages ordered newest first.
        """
        try:
            return (
                session.query(Message)
                .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
                .order_by(Message.created_at.desc())
                .all()
            )
        except Exception as e:
            logger.error("Error in MessagesDao.fetchMessagesForUser. Error Message: %s", e)
            raise e

    def markRead(self, session: Session, message: Message) -> Message:
        try:
            message.is_read = True
            return message
        except Exception as e:
            logger.error("Error in MessagesDao.markRead. Error Message: %s", e)
            raise e

    def countMessages(self, session: Session) -> dict[str, int]:
        """Return ``{"total": n, "unread": m}``."""
        try:
            total = session.query(func.count(Message.id)).scalar() or 0
            unread = session.query(func.count(Message.id)).filter(Message.is_read.is_(False)).scalar() or 0
            return {"total": total, "unread": unread}
        except Exception as e:
            logger.error("Error in MessagesDao.countMessages. Error Message: %s", e)
            raise e
