"""
Chat session storage backed by SQLAlchemy.

Sessions hold their whole message list in one JSON column; every turn replaces
the list wholesale, so concurrent turns on one session are last-writer-wins.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.database import SessionLocal
from app.models import ChatSession, ResponseRating

logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a chat session id does not exist."""

    def __init__(self, session_id: str):
        super().__init__(f"Chat session not found: {session_id}")
        self.session_id = session_id


class PersistenceError(RuntimeError):
    """Raised when the database rejects a write."""


class SessionStore:
    """
    Create, read and update chat sessions, and record response ratings.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_session(self, scenario_name: str, flow: str,
                       messages: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Create a new chat session.

        Args:
            scenario_name (str): Scenario display name
            flow (str): Conversation flow
            messages (Optional[List[Dict[str, Any]]]): Initial messages, usually empty

        Returns:
            Dict[str, Any]: The stored session
        """
        db = self.session_factory()
        try:
            session = ChatSession(
                id=str(uuid.uuid4()),
                scenario=scenario_name,
                flow=flow,
                messages=list(messages or []),
            )
            db.add(session)
            db.commit()
            db.refresh(session)
            logger.info(f"Created chat session {session.id} ({scenario_name} / {flow})")
            return session.to_dict()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating chat session: {str(e)}")
            raise PersistenceError(str(e)) from e
        finally:
            db.close()

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        db = self.session_factory()
        try:
            session = db.get(ChatSession, session_id)
            return session.to_dict() if session else None
        finally:
            db.close()

    def update_session(self, session_id: str, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Replace the full message list of a session.

        Args:
            session_id (str): Session identifier
            messages (List[Dict[str, Any]]): New ordered message list

        Returns:
            Dict[str, Any]: The updated session

        Raises:
            SessionNotFoundError: If the session does not exist
            PersistenceError: If the write fails
        """
        db = self.session_factory()
        try:
            session = db.get(ChatSession, session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.messages = list(messages)
            db.commit()
            db.refresh(session)
            logger.info(f"Updated chat session {session_id} with {len(messages)} messages")
            return session.to_dict()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating chat session {session_id}: {str(e)}")
            raise PersistenceError(str(e)) from e
        finally:
            db.close()

    def record_rating(self, session_id: str, message_index: int, rating: str) -> Dict[str, Any]:
        """
        Store a rating for one message. Ratings are kept for analytics only.

        Args:
            session_id (str): Session identifier
            message_index (int): Index of the rated message
            rating (str): 'positive' or 'negative'

        Returns:
            Dict[str, Any]: The stored rating
        """
        db = self.session_factory()
        try:
            stored = ResponseRating(
                id=str(uuid.uuid4()),
                session_id=session_id,
                message_index=message_index,
                rating=rating,
            )
            db.add(stored)
            db.commit()
            db.refresh(stored)
            logger.info(f"Recorded {rating} rating for message {message_index} in session {session_id}")
            return stored.to_dict()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error recording rating: {str(e)}")
            raise PersistenceError(str(e)) from e
        finally:
            db.close()
