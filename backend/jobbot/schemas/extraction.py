"""
Typed views of model output. Whatever JSON the completion returned is
validated and coerced here before it reaches the database.
"""
import math
import re

from pydantic import BaseModel, ConfigDict, field_validator

from jobbot.models.job import MATCH_QUALITIES

_MAX_SQLITE_INT = 2**63


def _coerce_text(value):
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def coerce_salary(value) -> int | None:
    """Annual salary as a non-negative int that fits a SQLite INTEGER, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(re.sub(r"[$,\s]", "", value))
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    return value if 0 <= value < _MAX_SQLITE_INT else None


def _coerce_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "remote")
    return bool(value)


class ExtractedJob(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    company: str | None = None
    url: str | None = None
    location: str | None = None
    remote: bool = False
    description: str | None = None
    requirements: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None

    @field_validator("title", "company", "url", "location", "description", "requirements", mode="before")
    @classmethod
    def _text(cls, v):
        return _coerce_text(v)

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def _salary(cls, v):
        return coerce_salary(v)

    @field_validator("remote", mode="before")
    @classmethod
    def _remote(cls, v):
        return _coerce_flag(v)


def clamp_confidence(value) -> int:
    """Round half-up and clamp into [0, 100]; anything non-numeric scores 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return min(100, max(0, math.floor(value + 0.5)))


class MatchAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    match_quality: str = "wider_net"
    match_confidence: int = 0
    match_reasoning: str = ""

    @field_validator("match_quality", mode="before")
    @classmethod
    def _quality(cls, v):
        # Never reject a scored job over an unknown category.
        return v if v in MATCH_QUALITIES else "wider_net"

    @field_validator("match_confidence", mode="before")
    @classmethod
    def _confidence(cls, v):
        return clamp_confidence(v)

    @field_validator("match_reasoning", mode="before")
    @classmethod
    def _reasoning(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)
