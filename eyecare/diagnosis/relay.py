# eyecare/diagnosis/relay.py
from __future__ import annotations

import logging
from typing import List

from eyecare.config import get_settings
from eyecare.diagnosis.prompts import build_chat_messages, build_diagnosis_messages
from eyecare.intake.image import decode_data_url
from eyecare.intake.schema import ChatMessage, DiagnosisRequest
from eyecare.llm import LLMClient

logger = logging.getLogger(__name__)


def generate_diagnosis(request: DiagnosisRequest, llm_client: LLMClient) -> str:
    """
    Ask the model for a narrative diagnosis of one intake.

    Raises InvalidImageError for an unusable image and LLMError when the
    model call fails.
    """
    settings = get_settings()
    image = decode_data_url(request.image_url)

    messages = build_diagnosis_messages(request, image.to_data_url())
    logger.info(
        "Generating diagnosis: eye=%s symptoms=%d image=%s %dx%d",
        request.affected_eye,
        len(request.symptoms),
        image.mime_type,
        image.width,
        image.height,
    )
    return llm_client.chat(messages, model=settings.vision_model)


def chat_about_diagnosis(
    messages: List[ChatMessage],
    diagnosis: str,
    llm_client: LLMClient,
) -> str:
    """
    Answer the latest user message in a conversation about a diagnosis.
    """
    if not messages:
        raise ValueError("messages must contain at least one message")
    if messages[-1].role != "user":
        raise ValueError("the last message must come from the user")

    settings = get_settings()
    prompt = build_chat_messages(messages, diagnosis)
    logger.info("Chat turn: history=%d", len(messages) - 1)
    return llm_client.chat(
        prompt,
        temperature=0.7,
        max_tokens=settings.chat_max_output_tokens,
    )
