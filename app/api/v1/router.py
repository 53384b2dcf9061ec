from fastapi import APIRouter
from app.api.v1.endpoints import chat, scenarios

api_router = APIRouter()

# Include router for chat session endpoints
api_router.include_router(
    chat.router,
    prefix="/chat",
    tags=["chat"]
)

# Include router for scenario catalogue endpoints
api_router.include_router(
    scenarios.router,
    prefix="/scenarios",
    tags=["scenarios"]
)
