"""
Pydantic models shared across the topic pipeline.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExtractionSource(str, Enum):
    """Provenance of a topic list."""

    TEMPLATE = "template"
    PDF = "pdf"
    AI = "ai"
    MANUAL = "manual"
    NONE = "none"


#: Human-readable labels shown next to a topic preview.
SOURCE_LABELS: dict[ExtractionSource, str] = {
    ExtractionSource.TEMPLATE: "📚 Predefined Template",
    ExtractionSource.PDF: "📄 Extracted from PDF",
    ExtractionSource.AI: "🤖 AI Generated",
    ExtractionSource.MANUAL: "✏️ Manually Added",
    ExtractionSource.NONE: "No Topics Found",
}


class GenerationResult(BaseModel):
    """Outcome of hybrid topic generation for a subject."""

    source: ExtractionSource
    topics: list[str] = Field(default_factory=list)


class SubjectTemplate(BaseModel):
    """A persisted curriculum template."""

    key: str
    name: str
    topics: list[str]


class TopicRecord(BaseModel):
    """A committed topic stored under a user's subject."""

    id: int
    user_id: str
    subject_id: str
    name: str
    completed: bool = False
    score: Optional[float] = None
    unit: int = 1
    position: int
    created_at: datetime
