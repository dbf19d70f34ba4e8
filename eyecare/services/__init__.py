# eyecare/services/__init__.py
from .wizard_session import LLMClientFactory, SessionNotFoundError, WizardSessionService

__all__ = ["LLMClientFactory", "SessionNotFoundError", "WizardSessionService"]
