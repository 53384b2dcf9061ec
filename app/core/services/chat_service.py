from typing import Dict, Any, List, Optional, Tuple, Callable
from datetime import datetime, timezone
import logging

from app.config import ASSISTANT_CONFIDENCE
from app.core.services.completion_service import CompletionAuthError
from app.core.services.fallback_service import generate_demo_response
from app.core.services.prompt_service import build_system_prompt, melbourne_time_of_day
from app.schemas.chat import ChatExport, PollenScenario
from app.services.session_store import SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChatService:
    """
    Service for chat turns.
    This service sequences a turn between the session store and the completion client,
    substituting the demo responder when the completion service rejects our credentials.
    """

    def __init__(self, store: SessionStore, completion_client,
                 clock: Callable[[], datetime] = _utc_now):
        """
        Initialize service with its collaborators.

        Args:
            store (SessionStore): Session persistence
            completion_client: Object exposing build_request() and complete()
            clock (Callable[[], datetime]): Source of the current UTC instant
        """
        self.store = store
        self.completion_client = completion_client
        self.clock = clock

    def create_session(self, scenario_name: str, flow: str,
                       messages: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        logger.info(f"Creating chat session for scenario '{scenario_name}' in flow '{flow}'")
        return self.store.create_session(scenario_name, flow, messages)

    def get_session(self, session_id: str) -> Dict[str, Any]:
        session = self.store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def send_message(self, session_id: str, message: str, scenario: PollenScenario,
                     flow: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Run one chat turn.

        Args:
            session_id (str): Session identifier
            message (str): User message text
            scenario (PollenScenario): Scenario the advice is based on
            flow (str): Conversation flow

        Returns:
            Tuple[Dict[str, Any], Dict[str, Any]]: The assistant message and the updated session

        Raises:
            SessionNotFoundError: If the session does not exist
            CompletionServiceError: If the completion service fails for any reason but credentials
            PersistenceError: If the session cannot be saved
        """
        session = self.get_session(session_id)
        messages = list(session.get("messages") or [])
        messages.append({
            "role": "user",
            "content": message,
            "timestamp": self.clock().isoformat(),
        })

        reply = self._generate_reply(message, scenario, flow)

        assistant_message = {
            "role": "assistant",
            "content": reply,
            "timestamp": self.clock().isoformat(),
            "confidence": ASSISTANT_CONFIDENCE,
            "scenario": scenario.name,
        }
        messages.append(assistant_message)

        updated = self.store.update_session(session_id, messages)
        return assistant_message, updated

    def _generate_reply(self, message: str, scenario: PollenScenario, flow: str) -> str:
        current_time = melbourne_time_of_day(self.clock())
        system_prompt = build_system_prompt(scenario, flow, current_time)
        request = self.completion_client.build_request(system_prompt, message)

        logger.info(f"Requesting completion for scenario '{scenario.name}' ({flow}) at {current_time}")
        try:
            return self.completion_client.complete(request).text
        except CompletionAuthError as e:
            logger.warning(f"Completion service rejected credentials, using demo response: {str(e)}")
            return generate_demo_response(message, scenario, flow)

    def record_rating(self, session_id: str, message_index: int, rating: str) -> Dict[str, Any]:
        return self.store.record_rating(session_id, message_index, rating)

    def export_session(self, session_id: str) -> Dict[str, Any]:
        """
        Build a downloadable snapshot of a session.

        Args:
            session_id (str): Session identifier

        Returns:
            Dict[str, Any]: Session metadata, ordered messages and export time
        """
        session = self.get_session(session_id)
        return ChatExport(
            sessionId=session["id"],
            scenario=session["scenario"],
            flow=session["flow"],
            createdAt=session["createdAt"],
            messages=session["messages"],
            exportedAt=self.clock().isoformat(),
        ).model_dump()
