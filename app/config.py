from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directories
BASE_DIR = Path(__file__).parent.parent

# Database Configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

if ENVIRONMENT == "development":
    # Use SQLite for local development
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR}/pollenpilot_dev.db"
    )
else:
    # Use PostgreSQL for production
    PGHOST = os.getenv("PGHOST", "localhost")
    PGDATABASE = os.getenv("PGDATABASE", "pollenpilot")
    PGUSER = os.getenv("PGUSER", "postgres")
    PGPASSWORD = os.getenv("PGPASSWORD", "")
    PGPORT = int(os.getenv("PGPORT", "5432"))
    PGSSLMODE = os.getenv("PGSSLMODE", "prefer")

    # Construct PostgreSQL DATABASE_URL
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"postgresql://{PGUSER}:{PGPASSWORD}@{PGHOST}:{PGPORT}/{PGDATABASE}?sslmode={PGSSLMODE}"
    )

# Application settings
APP_NAME = os.getenv("APP_NAME", "PollenPilot")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "False").lower() == "true"

# API settings
API_V1_STR = os.getenv("API_V1_STR", "/api/v1")

# Completion service (Anthropic Messages API)
# A placeholder key is rejected with 401, which routes every turn through the demo responder.
ANTHROPIC_API_KEY = (
    os.getenv("ANTHROPIC_API_KEY")
    or os.getenv("CLAUDE_API_KEY")
    or "sk-ant-test-key"
)
COMPLETION_MODEL = os.getenv("COMPLETION_MODEL", "claude-sonnet-4-20250514")
COMPLETION_MAX_TOKENS = int(os.getenv("COMPLETION_MAX_TOKENS", "800"))
COMPLETION_TIMEOUT_SECONDS = float(os.getenv("COMPLETION_TIMEOUT_SECONDS", "30"))

# Chat settings
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "Australia/Melbourne")
ASSISTANT_CONFIDENCE = "High"
EXPORT_FILENAME_PREFIX = "pollenpilot-chat"


@dataclass(frozen=True)
class CompletionSettings:
    """Explicit configuration handed to the completion client at startup."""
    api_key: str
    model_id: str = COMPLETION_MODEL
    max_output_tokens: int = COMPLETION_MAX_TOKENS
    timeout_seconds: float = COMPLETION_TIMEOUT_SECONDS
    base_url: Optional[str] = None


def get_completion_settings() -> CompletionSettings:
    """Build completion settings from the environment-derived constants."""
    return CompletionSettings(
        api_key=ANTHROPIC_API_KEY,
        model_id=COMPLETION_MODEL,
        max_output_tokens=COMPLETION_MAX_TOKENS,
        timeout_seconds=COMPLETION_TIMEOUT_SECONDS,
        base_url=os.getenv("ANTHROPIC_BASE_URL") or None,
    )
