# eyecare/llm/client.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional

from openai import OpenAI, OpenAIError

from eyecare.config import get_settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when the upstream model call fails."""


class LLMClient(ABC):
    """
    Simple abstraction so we can swap providers if needed.
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        messages: list of {"role": "system"|"user"|"assistant", "content": ...}
        content is either a string or a list of OpenAI content parts
        (text / image_url) for multimodal prompts.
        returns: assistant content as a string
        """
        ...


class OpenAILLMClient(LLMClient):
    """
    OpenAI implementation using the official Python client.

    Any OpenAI-compatible endpoint works through OPENAI_BASE_URL.
    """

    def __init__(self, model: Optional[str] = None):
        settings = get_settings()
        if not settings.openai_api_key:
            raise LLMError(
                "OPENAI_API_KEY is not set in environment (.env)."
            )

        self.client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        self.default_model = model or settings.llm_model

    def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        kwargs: Dict[str, Any] = {
            "model": model or self.default_model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            completion = self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.warning("LLM call failed (model=%s): %s", kwargs["model"], e)
            raise LLMError(str(e)) from e

        content = completion.choices[0].message.content
        return content or ""
