# eyecare/intake/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from eyecare.intake.catalog import Option
from eyecare.intake.schema import ChatMessage
from eyecare.intake.stages import WizardStep


@dataclass
class WizardState:
    """
    In-memory representation of one intake wizard session.

    Nothing here is persisted; a restart or a new session starts from scratch.
    """

    step: WizardStep = WizardStep.SYMPTOMS

    selected_symptoms: List[str] = field(default_factory=list)
    affected_eye: Optional[str] = None
    ocular_history: List[str] = field(default_factory=list)
    medical_conditions: List[str] = field(default_factory=list)

    # Symptom options typed in by the patient, shown next to the predefined ones
    custom_symptoms: List[Option] = field(default_factory=list)

    # category -> whether the free-text search box is open
    show_search: Dict[str, bool] = field(default_factory=dict)

    image_data_url: Optional[str] = None

    diagnosis: str = ""
    is_generating: bool = False
    chat: List[ChatMessage] = field(default_factory=list)

    warning: Optional[str] = None
