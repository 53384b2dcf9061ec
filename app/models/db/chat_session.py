"""
Chat session model for storing conversations between a resident and the assistant.
"""
from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from app.database import Base


class ChatSession(Base):
    """
    Model for storing a chat session and its full message list.
    """
    __tablename__ = "chat_sessions"

    # Primary key
    id = Column(String(36), primary_key=True, index=True)

    # Owner (sessions are anonymous for now)
    user_id = Column(String(36), nullable=True)

    # Conversation context
    scenario = Column(String(255), nullable=False)  # Scenario display name
    flow = Column(String(100), nullable=False)  # 'Morning Check-in', 'Activity Planning', ...

    # Ordered list of message dicts, replaced wholesale on every turn
    messages = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_dict(self):
        """Convert chat session to dictionary."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "scenario": self.scenario,
            "flow": self.flow,
            "messages": list(self.messages or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
