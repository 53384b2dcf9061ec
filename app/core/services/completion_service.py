"""
Client for the external completion service (Anthropic Messages API).

The client is constructed explicitly from CompletionSettings and injected into
the chat service; nothing here reads the environment.
"""
from dataclasses import dataclass
import logging
from typing import Optional

import anthropic

from app.config import CompletionSettings

logger = logging.getLogger(__name__)

EMPTY_COMPLETION_TEXT = "Sorry, I could not process your request."


class CompletionError(Exception):
    """Base class for completion service failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CompletionAuthError(CompletionError):
    """The completion service rejected our credentials."""


class CompletionServiceError(CompletionError):
    """Any other completion failure: rate limits, bad requests, network errors."""


@dataclass(frozen=True)
class CompletionRequest:
    system_instruction: str
    user_text: str
    model_id: str
    max_output_tokens: int


@dataclass(frozen=True)
class CompletionResponse:
    text: str


class AnthropicCompletionClient:
    """
    Thin wrapper around the Anthropic SDK that maps provider errors onto
    CompletionAuthError / CompletionServiceError.
    """

    def __init__(self, settings: CompletionSettings, sdk_client=None):
        """
        Initialize the client.

        Args:
            settings (CompletionSettings): Credentials, model and limits
            sdk_client: Pre-built anthropic.Anthropic instance, mainly for tests
        """
        self.settings = settings
        if sdk_client is None:
            sdk_client = anthropic.Anthropic(
                api_key=settings.api_key,
                base_url=settings.base_url,
                timeout=settings.timeout_seconds,
                max_retries=0,
            )
        self._client = sdk_client
        logger.info(f"Completion client initialized for model {settings.model_id}")

    def build_request(self, system_instruction: str, user_text: str) -> CompletionRequest:
        return CompletionRequest(
            system_instruction=system_instruction,
            user_text=user_text,
            model_id=self.settings.model_id,
            max_output_tokens=self.settings.max_output_tokens,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Send one system + user exchange to the completion service.

        Args:
            request (CompletionRequest): The exchange to send

        Returns:
            CompletionResponse: The first text block of the reply

        Raises:
            CompletionAuthError: If the service answers 401
            CompletionServiceError: For every other failure
        """
        try:
            response = self._client.messages.create(
                model=request.model_id,
                max_tokens=request.max_output_tokens,
                system=request.system_instruction,
                messages=[{"role": "user", "content": request.user_text}],
            )
        except anthropic.AuthenticationError as e:
            raise CompletionAuthError(str(e), status_code=401) from e
        except anthropic.APIStatusError as e:
            if e.status_code == 401:
                raise CompletionAuthError(str(e), status_code=401) from e
            raise CompletionServiceError(str(e), status_code=e.status_code) from e
        except anthropic.APIError as e:
            raise CompletionServiceError(str(e)) from e

        return CompletionResponse(text=self._first_text(response))

    @staticmethod
    def _first_text(response) -> str:
        content = getattr(response, "content", None) or []
        if content and getattr(content[0], "type", None) == "text":
            return content[0].text
        return EMPTY_COMPLETION_TEXT
