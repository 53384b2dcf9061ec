from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from app.api.v1.router import api_router
from app.config import API_V1_STR, APP_NAME, APP_VERSION
from app.database import init_db

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=f"{APP_NAME} API",
    description="""
    API for PollenPilot - conversational hayfever advice for Melbourne residents.

    ## Features

    * **Chat Sessions**: Time-aware pollen advice driven by a weather/pollen scenario
    * **Demo Fallback**: Template replies when the completion service rejects the API key
    * **Ratings**: Thumbs-up / thumbs-down feedback on assistant replies
    * **Export**: Download a full conversation as JSON
    * **Scenarios**: Canonical Melbourne pollen days with proactive recommendations

    ## Endpoints

    - `/api/v1/chat/sessions` - Create sessions and send messages
    - `/api/v1/chat/ratings` - Rate assistant replies
    - `/api/v1/scenarios` - Browse scenarios and flows
    """,
    version=APP_VERSION,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=API_V1_STR)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed payloads as 400 Bad Request."""
    message = "Invalid rating data" if request.url.path.endswith("/ratings") else "Invalid request data"
    logger.info(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(
        status_code=400,
        content={"message": message, "error": jsonable_encoder(exc.errors())},
    )


@app.on_event("startup")
async def startup_event():
    """Create database tables before serving any requests."""
    logger.info("Starting application - initializing database...")
    init_db()
    logger.info("Application startup complete")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": f"{APP_NAME} API",
        "version": APP_VERSION,
        "status": "active",
        "docs_url": "/docs",
        "description": "Hayfever and pollen-risk advice for Melbourne residents",
        "features": [
            "Chat Sessions",
            "Demo Fallback",
            "Ratings",
            "Export",
            "Scenarios"
        ]
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
