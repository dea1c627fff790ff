"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- store/CLI inputs (`Profile`)
- explainable scoring output (`MatchResult`, `RankingResult`)
- ledger state (`DispositionRecord`)

Keeping these models in one place helps:
- validation (reject malformed profiles early),
- typed refactors,
- consistent JSON output across CLI and any caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, Field, model_validator

ProfileType = Literal[
    "startup",
    "research",
    "investor",
    "individual",
    "accelerator",
    "incubator",
    "corporate",
    "government",
]
PROFILE_TYPES: tuple[str, ...] = get_args(ProfileType)

Disposition = Literal["like", "dislike"]
DISPOSITIONS: tuple[str, ...] = get_args(Disposition)

DEFAULT_ORGANIZATION = "the industry"


class Profile(BaseModel):
    """An innovator profile eligible to be scored and ranked."""

    id: str = Field(..., min_length=1)
    type: ProfileType
    tags: list[str]

    name: str | None = None
    location: str | None = None
    organization: str | None = None
    description: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def display_organization(self) -> str:
        return self.organization or DEFAULT_ORGANIZATION


class MatchResult(BaseModel):
    """One scored candidate: the profile plus its score, shared tags and highlight."""

    profile: Profile
    score: int = Field(..., ge=0, le=100)
    shared_tags: list[str] = Field(default_factory=list)
    highlight: str
    liked: bool = False


class DispositionRecord(BaseModel):
    """A viewer's like/dislike for one target, as stored by a preference ledger."""

    viewer_id: str = Field(..., min_length=1)
    target_id: str = Field(..., min_length=1)
    disposition: Disposition
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def _validate_order(self) -> "DispositionRecord":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be before created_at")
        return self


class RankingResult(BaseModel):
    """Top-N matches for a viewer plus run metadata."""

    generated_at: datetime
    viewer_id: str
    results: list[MatchResult]
    meta: dict[str, Any] = Field(default_factory=dict)
