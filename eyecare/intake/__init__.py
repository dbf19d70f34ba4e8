# eyecare/intake/__init__.py
from .errors import InvalidImageError, UnknownCategoryError, WizardValidationError
from .schema import ChatMessage, DiagnosisRequest
from .stages import WizardStep
from .state import WizardState
from .wizard import IntakeWizard

__all__ = [
    "ChatMessage",
    "DiagnosisRequest",
    "IntakeWizard",
    "InvalidImageError",
    "UnknownCategoryError",
    "WizardState",
    "WizardStep",
    "WizardValidationError",
]
