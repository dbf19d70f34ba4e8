# eyecare/services/wizard_session.py
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

from eyecare.config import get_settings
from eyecare.diagnosis import chat_about_diagnosis, generate_diagnosis
from eyecare.intake.errors import InvalidImageError, WizardValidationError
from eyecare.intake.schema import ChatMessage
from eyecare.intake.stages import WizardStep
from eyecare.intake.state import WizardState
from eyecare.intake.wizard import IntakeWizard
from eyecare.llm import LLMClient, LLMError

logger = logging.getLogger(__name__)

DIAGNOSIS_FAILED_MESSAGE = (
    "An error occurred while generating the diagnosis. Please try again."
)
CHAT_FAILED_MESSAGE = (
    "I'm sorry, I'm having trouble responding right now. Please try again later."
)

# Builds the model client on demand, so steps that never call the model
# work without an API key.
LLMClientFactory = Callable[[], LLMClient]


class SessionNotFoundError(KeyError):
    pass


class WizardSessionService:
    """
    Service that coordinates:
      - keeping one WizardState per browser session (in memory only)
      - driving the IntakeWizard
      - calling the diagnosis and chat relays at the right moments

    Sessions idle for longer than session_ttl_seconds are dropped, and the
    least recently used session is evicted once max_sessions is reached.
    """

    def __init__(
        self,
        session_ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.wizard = IntakeWizard()
        self.session_ttl_seconds = (
            session_ttl_seconds if session_ttl_seconds is not None else settings.session_ttl_seconds
        )
        self.max_sessions = max_sessions if max_sessions is not None else settings.max_sessions
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, WizardState] = {}
        self._last_seen: Dict[str, float] = {}

    # ------------------------------------------------------------------
    # Session bookkeeping
    # ------------------------------------------------------------------

    def start_session(self) -> Tuple[str, WizardState]:
        session_id = str(uuid.uuid4())
        state = self.wizard.start()
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            while self._sessions and len(self._sessions) >= self.max_sessions:
                oldest = min(self._last_seen, key=self._last_seen.get)
                self._drop(oldest)
                logger.info("Evicted wizard session %s (session cap reached)", oldest)
            self._sessions[session_id] = state
            self._last_seen[session_id] = now
        logger.info("Started wizard session %s", session_id)
        return session_id, state

    def get(self, session_id: str) -> WizardState:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            state = self._sessions.get(session_id)
            if state is None:
                raise SessionNotFoundError(session_id)
            self._last_seen[session_id] = now
            return state

    def discard(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFoundError(session_id)
            self._drop(session_id)

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_expired(self, now: float) -> None:
        expired = [
            sid for sid, seen in self._last_seen.items()
            if now - seen > self.session_ttl_seconds
        ]
        for sid in expired:
            self._drop(sid)
        if expired:
            logger.info("Dropped %d idle wizard sessions", len(expired))

    def _drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    # ------------------------------------------------------------------
    # Wizard actions that reach the model
    # ------------------------------------------------------------------

    def proceed(self, session_id: str, llm_client_factory: LLMClientFactory) -> WizardState:
        """
        Advance the wizard. Leaving the image step generates the diagnosis;
        a failed generation still advances, with an error message as the
        diagnosis text. A new diagnosis starts a new conversation.
        """
        state = self.get(session_id)
        leaving_image_step = state.step == WizardStep.IMAGE_UPLOAD

        if leaving_image_step and state.image_data_url:
            state.is_generating = True
            state.chat = []
            try:
                request = self.wizard.build_diagnosis_request(state)
                state.diagnosis = generate_diagnosis(request, llm_client_factory())
            except (LLMError, InvalidImageError):
                logger.exception("Diagnosis generation failed for session %s", session_id)
                state.diagnosis = DIAGNOSIS_FAILED_MESSAGE
            finally:
                state.is_generating = False

        return self.wizard.proceed(state)

    def send_chat_message(
        self,
        session_id: str,
        content: str,
        llm_client_factory: LLMClientFactory,
    ) -> WizardState:
        """
        Append the user's message and the assistant's reply to the transcript.
        Blank messages are ignored.
        """
        state = self.get(session_id)
        if state.step != WizardStep.DIAGNOSIS:
            raise WizardValidationError("Chat is available once the diagnosis is ready.")
        if not content.strip():
            return state

        state.chat.append(ChatMessage(role="user", content=content))
        try:
            reply = chat_about_diagnosis(state.chat, state.diagnosis, llm_client_factory())
        except LLMError:
            logger.exception("Chat relay failed for session %s", session_id)
            reply = CHAT_FAILED_MESSAGE

        state.chat.append(ChatMessage(role="assistant", content=reply))
        return state
