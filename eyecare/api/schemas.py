# eyecare/api/schemas.py
from __future__ import annotations

from typing import Dict, Optional, List

from pydantic import BaseModel, Field

from eyecare.diagnosis import DiagnosisSection
from eyecare.intake.schema import ChatMessage, DiagnosisRequest


class GenerateDiagnosisRequest(DiagnosisRequest):
    pass


class GenerateDiagnosisResponse(BaseModel):
    diagnosis: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)
    diagnosis: str


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str


class OptionSchema(BaseModel):
    id: str
    label: str
    emoji: str


class CatalogResponse(BaseModel):
    category: str
    options: List[OptionSchema]


class SuggestionsResponse(BaseModel):
    category: str
    query: str
    suggestions: List[str]


class ToggleRequest(BaseModel):
    id: str


class CustomEntryRequest(BaseModel):
    label: str


class SelectEyeRequest(BaseModel):
    eye: str


class ImageUploadRequest(BaseModel):
    image_url: str = Field(..., alias="imageUrl")


class ChatTurnRequest(BaseModel):
    content: str


class WizardStateSchema(BaseModel):
    step: int
    step_name: str
    selected_symptoms: List[str]
    symptom_options: List[OptionSchema]
    affected_eye: Optional[str]
    ocular_history: List[str]
    medical_conditions: List[str]
    show_search: Dict[str, bool]
    has_image: bool
    diagnosis: str
    diagnosis_sections: List[DiagnosisSection]
    is_generating: bool
    chat: List[ChatMessage]
    warning: Optional[str]


class WizardSessionResponse(BaseModel):
    session_id: str
    state: WizardStateSchema
