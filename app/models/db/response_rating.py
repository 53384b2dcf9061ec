"""
Response rating model for thumbs-up / thumbs-down feedback on assistant replies.
"""
from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.sql import func
from app.database import Base


class ResponseRating(Base):
    """
    Model for storing ratings of individual assistant messages.
    Ratings are write-only from the chat flow's point of view.
    """
    __tablename__ = "response_ratings"

    # Primary key
    id = Column(String(36), primary_key=True, index=True)

    # Rated message
    session_id = Column(String(36), nullable=False, index=True)
    message_index = Column(Integer, nullable=False)
    rating = Column(String(20), nullable=False)  # 'positive' or 'negative'

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_dict(self):
        """Convert response rating to dictionary."""
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "messageIndex": self.message_index,
            "rating": self.rating,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
