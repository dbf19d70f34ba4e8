# eyecare/diagnosis/prompts.py
from __future__ import annotations

from typing import Any, Dict, List

from eyecare.intake.schema import ChatMessage, DiagnosisRequest

DIAGNOSIS_SYSTEM_PROMPT = (
    "You are an AI assistant specializing in eye health. "
    "You review self-reported eye symptoms together with a photo of the eye "
    "and write a clear, structured assessment for the patient."
)

CHAT_GUIDELINES = """Important guidelines:
1. Do not provide medical advice or diagnoses. Always recommend consulting with an eye care professional for specific medical concerns.
2. Provide general information about eye health, common eye conditions, and preventive measures.
3. Engage with the user by asking follow-up questions to better understand their concerns.
4. Use simple language and explain medical terms when necessary.
5. Encourage healthy eye care habits and regular check-ups.
6. If asked about symptoms or conditions not related to eyes, politely redirect the conversation to eye health topics.
7. Be empathetic and supportive in your responses."""


def _join(values: List[str]) -> str:
    return ", ".join(values) if values else "None reported"


def build_diagnosis_prompt(request: DiagnosisRequest) -> str:
    return (
        "Analyze the following eye-related information and provide a detailed diagnosis:\n\n"
        f"Affected Eye: {request.affected_eye}\n"
        f"Symptoms: {_join(request.symptoms)}\n"
        f"Ocular History: {_join(request.ocular_history)}\n"
        f"Medical Conditions: {_join(request.medical_conditions)}\n\n"
        "Based on this information and the uploaded eye image, provide:\n"
        "1. A possible diagnosis\n"
        "2. Explanation of the condition\n"
        "3. Potential causes\n"
        "4. Recommended next steps or treatments\n"
        "5. Any additional relevant information"
    )


def build_diagnosis_messages(request: DiagnosisRequest, image_data_url: str) -> List[Dict[str, Any]]:
    """
    Multimodal chat messages: the text prompt and the eye image as
    OpenAI content parts.
    """
    return [
        {"role": "system", "content": DIAGNOSIS_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": build_diagnosis_prompt(request)},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]


def build_chat_system_prompt(diagnosis: str) -> str:
    return (
        "You are an AI assistant specializing in eye health. "
        "You have access to the following diagnosis:\n\n"
        f"{diagnosis}\n\n"
        "Please respond to the user's questions based on this diagnosis and your "
        "knowledge of eye health. Be friendly, informative, and concise in your "
        "responses. Use emojis occasionally to make the conversation more engaging.\n\n"
        f"{CHAT_GUIDELINES}"
    )


def build_chat_messages(messages: List[ChatMessage], diagnosis: str) -> List[Dict[str, Any]]:
    """
    System prompt grounded in the diagnosis, the earlier turns as history,
    then the user's latest message.
    """
    *history, latest = messages
    out: List[Dict[str, Any]] = [
        {"role": "system", "content": build_chat_system_prompt(diagnosis)},
    ]
    out.extend({"role": m.role, "content": m.content} for m in history)
    out.append({"role": "user", "content": f"User's message: {latest.content}"})
    return out
