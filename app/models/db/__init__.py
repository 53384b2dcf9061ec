"""
Database models for PollenPilot.
"""
from .chat_session import ChatSession
from .response_rating import ResponseRating

__all__ = ["ChatSession", "ResponseRating"]
