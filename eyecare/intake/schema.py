# eyecare/intake/schema.py
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class DiagnosisRequest(BaseModel):
    """
    Everything the diagnosis relay needs from one completed intake.

    Serialised with the camelCase keys the web client posts
    (affectedEye, ocularHistory, ...).
    """

    symptoms: List[str] = Field(default_factory=list)
    affected_eye: str = Field(..., alias="affectedEye")
    ocular_history: List[str] = Field(default_factory=list, alias="ocularHistory")
    medical_conditions: List[str] = Field(default_factory=list, alias="medicalConditions")
    image_url: str = Field(..., alias="imageUrl", description="data:image/...;base64,... URL")

    model_config = ConfigDict(populate_by_name=True)
