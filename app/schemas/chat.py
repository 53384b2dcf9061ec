from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class Flow(str, Enum):
    """Conversational modes offered by the chat interface."""
    MORNING_CHECK_IN = "Morning Check-in"
    ACTIVITY_PLANNING = "Activity Planning"
    BAD_DAY_RECOVERY = "Bad Day Recovery"
    GENERAL = "General"


class RatingValue(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class PollenScenario(BaseModel):
    """A fixed snapshot of pollen and weather conditions used to drive advice."""
    name: str = Field(..., description="Unique scenario name")
    date: str = Field(..., description="Display date")
    grass_pollen: int = Field(..., alias="grassPollen", description="Grass pollen in grains/m³")
    wind_speed: int = Field(..., alias="windSpeed", description="Wind speed in km/h")
    wind_direction: str = Field(..., alias="windDirection", description="Compass label (North, South, Variable, ...)")
    temperature: int = Field(..., description="Temperature in °C")
    humidity: int = Field(..., ge=0, le=100, description="Relative humidity (%)")
    risk_level: str = Field(..., alias="riskLevel", description="Low, Moderate, High, Very High or Extreme")
    conditions: str = Field(..., description="Free-text description of conditions")
    confidence: str = Field(..., description="Descriptive confidence note")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Southerly Relief",
                "date": "November 12, 2024",
                "grassPollen": 15,
                "windSpeed": 12,
                "windDirection": "South",
                "temperature": 19,
                "humidity": 58,
                "riskLevel": "Low",
                "conditions": "Cool southerly winds from ocean clearing the air",
                "confidence": "High - southerlies consistently bring relief"
            }
        },
    )


class ChatMessage(BaseModel):
    """A single conversation turn as stored on the session."""
    role: str = Field(..., pattern="^(user|assistant)$", description="Message author")
    content: str = Field(..., description="Message text")
    timestamp: str = Field(..., description="ISO-8601 creation time")
    confidence: Optional[str] = Field(None, description="Confidence label for assistant replies")
    scenario: Optional[str] = Field(None, description="Scenario name the reply was produced for")

    model_config = ConfigDict(frozen=True)


class ChatSessionCreate(BaseModel):
    """Request schema for creating a chat session."""
    scenario: str = Field(..., min_length=1, description="Scenario name")
    flow: str = Field(..., min_length=1, description="Conversation flow")
    messages: Optional[List[ChatMessage]] = Field(default=None, description="Initial messages")

    model_config = {
        "json_schema_extra": {
            "example": {
                "scenario": "Classic Bad Day - Melbourne Cup Day",
                "flow": "Morning Check-in",
                "messages": []
            }
        }
    }


class ChatSessionResponse(BaseModel):
    """Response schema for a chat session."""
    id: str = Field(..., description="Session identifier")
    userId: Optional[str] = Field(None, description="Owning user, if any")
    scenario: str = Field(..., description="Scenario name")
    flow: str = Field(..., description="Conversation flow")
    messages: List[ChatMessage] = Field(default_factory=list, description="Ordered conversation")
    createdAt: Optional[str] = Field(None, description="Creation time")


class SendMessageRequest(BaseModel):
    """Request schema for sending a message in a session."""
    message: str = Field(..., min_length=1, description="User message text")
    scenario: PollenScenario = Field(..., description="Scenario the advice should be based on")
    flow: str = Field(..., description="Conversation flow")

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Can I go for a run?",
                "scenario": PollenScenario.model_config["json_schema_extra"]["example"],
                "flow": "Activity Planning"
            }
        }
    }


class SendMessageResponse(BaseModel):
    """Response schema for a completed turn."""
    message: ChatMessage = Field(..., description="The new assistant message")
    session: ChatSessionResponse = Field(..., description="The updated session")


class RatingCreate(BaseModel):
    """Request schema for rating an assistant message."""
    sessionId: str = Field(..., min_length=1, description="Session identifier")
    messageIndex: int = Field(..., ge=0, description="Index of the rated message")
    rating: RatingValue = Field(..., description="positive or negative")


class RatingResponse(BaseModel):
    """Response schema for a stored rating."""
    id: str
    sessionId: str
    messageIndex: int
    rating: str
    createdAt: Optional[str] = None


class ChatExport(BaseModel):
    """Downloadable snapshot of a chat session."""
    sessionId: str
    scenario: str
    flow: str
    createdAt: Optional[str] = None
    messages: List[Any] = Field(default_factory=list)
    exportedAt: str
