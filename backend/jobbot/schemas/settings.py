from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from jobbot.schemas.extraction import coerce_salary


def split_list(value) -> list[str]:
    """Accept both list values and the legacy comma-separated string form."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return []


class CandidateProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    target_title: str | None = None
    years_experience: str | None = None
    location: str | None = None
    remote_preference: str | None = None
    target_salary: int | None = None
    target_industries: list[str] = []
    skills: list[str] = []
    background: str | None = None

    @field_validator(
        "name", "email", "target_title", "years_experience",
        "location", "remote_preference", "background",
        mode="before",
    )
    @classmethod
    def _text(cls, v):
        if v is None or isinstance(v, (dict, list)):
            return None
        text = str(v).strip()
        return text or None

    @field_validator("target_salary", mode="before")
    @classmethod
    def _salary(cls, v):
        return coerce_salary(v)

    @field_validator("target_industries", "skills", mode="before")
    @classmethod
    def _list(cls, v):
        return split_list(v)


class DailyQuota(BaseModel):
    total: int = 8
    perfect_match: int = 3
    wider_net: int = 5


class SettingWrite(BaseModel):
    key: str
    value: Any

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, v):
        if not v.strip():
            raise ValueError("key must not be empty")
        return v.strip()
