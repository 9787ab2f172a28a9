"""
Progress tracking schemas for PatternHub.

Defines Pydantic models for learner progress including:
- The persisted UserProgress snapshot
- Timed challenge sessions
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserProgress(BaseModel):
    """
    Immutable snapshot of one learner's progress.

    Serialized with camelCase keys, which is the layout of the stored record.
    challenges_completed, patterns_completed and achievements are ordered
    sets: duplicates are dropped on validation.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    challenges_completed: tuple[str, ...] = ()
    patterns_completed: tuple[str, ...] = ()
    total_points: int = Field(default=0, ge=0)
    achievements: tuple[str, ...] = ()
    current_streak: int = Field(default=0, ge=0)
    last_activity_date: Optional[date] = None
    fastest_completion_seconds: Optional[float] = Field(default=None, ge=0)

    @field_validator("challenges_completed", "patterns_completed", "achievements")
    @classmethod
    def unique_ids(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(v))

    @field_validator("last_activity_date", mode="before")
    @classmethod
    def date_from_timestamp(cls, v: Any) -> Any:
        # Older records stored a full ISO timestamp
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class GameSession(BaseModel):
    """A timed attempt at one challenge."""
    model_config = ConfigDict(frozen=True)

    pattern_id: str
    challenge_id: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    attempts: int = Field(default=0, ge=0)
    completed: bool = False
    score: int = 0

    @property
    def elapsed_seconds(self) -> Optional[float]:
        if self.ended_at is None:
            return None
        return max(0.0, (self.ended_at - self.started_at).total_seconds())
