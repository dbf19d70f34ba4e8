# eyecare/diagnosis/formatting.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

LIST_SECTION_TITLES = ("Symptom Interpretation:", "Recommendations:")


class DiagnosisSection(BaseModel):
    title: Optional[str] = None
    items: List[str] = Field(default_factory=list)
    text: Optional[str] = None


def format_diagnosis(text: str) -> List[DiagnosisSection]:
    """
    Split a diagnosis into display sections.

    Blocks starting with a known heading become a title plus bullet items,
    anything else is kept as a paragraph.
    """
    sections: List[DiagnosisSection] = []
    for block in text.split("\n\n"):
        block = block.strip()
        if not block:
            continue

        if block.startswith(LIST_SECTION_TITLES):
            title, *lines = block.split("\n")
            items = [line.strip().lstrip("-*• ").strip() for line in lines]
            sections.append(
                DiagnosisSection(title=title.strip(), items=[i for i in items if i])
            )
        else:
            sections.append(DiagnosisSection(text=block))
    return sections
