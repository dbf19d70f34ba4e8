# eyecare/diagnosis/__init__.py
from .formatting import DiagnosisSection, format_diagnosis
from .relay import chat_about_diagnosis, generate_diagnosis

__all__ = [
    "DiagnosisSection",
    "chat_about_diagnosis",
    "format_diagnosis",
    "generate_diagnosis",
]
