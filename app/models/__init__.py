"""
Model modules for the PollenPilot application.
"""
# Import database models
from app.models.db.chat_session import ChatSession
from app.models.db.response_rating import ResponseRating

__all__ = ["ChatSession", "ResponseRating"]
