from fastapi import APIRouter, HTTPException, Depends, Path
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import logging

from app.config import EXPORT_FILENAME_PREFIX, get_completion_settings
from app.schemas.chat import (
    ChatSessionCreate,
    ChatSessionResponse,
    SendMessageRequest,
    SendMessageResponse,
    RatingCreate,
    RatingResponse,
)
from app.core.services.chat_service import ChatService
from app.core.services.completion_service import AnthropicCompletionClient
from app.services.session_store import SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Create a singleton instance of the completion client
# This ensures every request reuses the same configured SDK connection pool
_completion_client_instance = None


def get_completion_client():
    """Dependency to get the completion client (singleton pattern)."""
    global _completion_client_instance
    if _completion_client_instance is None:
        _completion_client_instance = AnthropicCompletionClient(get_completion_settings())
    return _completion_client_instance


def get_session_store():
    """Dependency to get the session store."""
    return SessionStore()


def get_chat_service(
    store: SessionStore = Depends(get_session_store),
    completion_client=Depends(get_completion_client)
):
    """Dependency to get the chat service."""
    return ChatService(store, completion_client)


@router.post("/sessions", response_model=ChatSessionResponse, response_model_exclude_none=True)
def create_session(
    request: ChatSessionCreate,
    service: ChatService = Depends(get_chat_service)
):
    """
    Create a new chat session for a scenario and flow.
    """
    try:
        messages = [m.model_dump(exclude_none=True) for m in request.messages or []]
        return service.create_session(request.scenario, request.flow, messages)
    except Exception as e:
        logger.error(f"Error creating chat session: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create session: {str(e)}")


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse, response_model_exclude_none=True)
def get_session(
    session_id: str = Path(..., description="Chat session identifier"),
    service: ChatService = Depends(get_chat_service)
):
    """
    Get a chat session with its full message history.
    """
    try:
        return service.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Chat session not found")


@router.post("/sessions/{session_id}/messages", response_model=SendMessageResponse, response_model_exclude_none=True)
def send_message(
    request: SendMessageRequest,
    session_id: str = Path(..., description="Chat session identifier"),
    service: ChatService = Depends(get_chat_service)
):
    """
    Send a message and receive PollenPilot's reply.

    The reply comes from the completion service, or from the built-in demo responder
    when the service rejects the configured API key.
    """
    try:
        message, session = service.send_message(
            session_id=session_id,
            message=request.message,
            scenario=request.scenario,
            flow=request.flow
        )
        return {"message": message, "session": session}
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Chat session not found")
    except Exception as e:
        logger.error(f"Error processing message for session {session_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to process message: {str(e)}")


@router.post("/ratings", response_model=RatingResponse)
def rate_response(
    request: RatingCreate,
    service: ChatService = Depends(get_chat_service)
):
    """
    Rate an assistant message as positive or negative.
    """
    try:
        return service.record_rating(request.sessionId, request.messageIndex, request.rating.value)
    except Exception as e:
        logger.error(f"Error recording rating: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to record rating: {str(e)}")


@router.get("/sessions/{session_id}/export")
def export_session(
    session_id: str = Path(..., description="Chat session identifier"),
    service: ChatService = Depends(get_chat_service)
):
    """
    Download a chat session as a JSON file.
    """
    try:
        export_data = service.export_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Chat session not found")
    except Exception as e:
        logger.error(f"Error exporting chat session {session_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to export chat: {str(e)}")

    return JSONResponse(
        content=jsonable_encoder(export_data),
        headers={
            "Content-Disposition": f'attachment; filename="{EXPORT_FILENAME_PREFIX}-{session_id}.json"'
        }
    )


@router.get("/healthcheck")
async def healthcheck():
    """Health check endpoint for the chat API."""
    return {"status": "ok", "service": "chat"}
