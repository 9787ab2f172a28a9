"""
Catalog schemas for PatternHub.

Defines Pydantic models for the static pattern catalog:
- Design patterns grouped by category
- Challenges owned by exactly one pattern
- The catalog with id lookups
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


class Category(str, Enum):
    CREATIONAL = "creational"
    STRUCTURAL = "structural"
    BEHAVIORAL = "behavioral"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ChallengeType(str, Enum):
    DEBUG = "debug"
    IMPLEMENT = "implement"
    REFACTOR = "refactor"
    DESIGN = "design"
    QUIZ = "quiz"
    ANALYSIS = "analysis"


class Challenge(BaseModel):
    """A single gamified exercise worth a fixed number of points."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    pattern_id: str = ""     # stamped by the owning DesignPattern
    title: str
    description: str = ""
    difficulty: Difficulty
    type: ChallengeType = ChallengeType.IMPLEMENT
    points: int = Field(..., gt=0)
    hints: tuple[str, ...] = ()


class DesignPattern(BaseModel):
    """
    A design pattern topic with its lesson and ordered challenges.
    Every challenge carries this pattern's id as pattern_id.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: Category
    description: str = ""
    difficulty: Difficulty
    lesson_file: Optional[str] = None  # relative to the lessons directory
    challenges: tuple[Challenge, ...] = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def stamp_pattern_id(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "id" not in data:
            return data
        stamped = []
        for challenge in data.get("challenges") or ():
            if isinstance(challenge, Challenge):
                if not challenge.pattern_id:
                    challenge = challenge.model_copy(update={"pattern_id": data["id"]})
            elif isinstance(challenge, dict):
                challenge = {"pattern_id": data["id"], **challenge}
            stamped.append(challenge)
        return {**data, "challenges": stamped}

    @model_validator(mode="after")
    def challenges_belong_here(self) -> "DesignPattern":
        for challenge in self.challenges:
            if challenge.pattern_id != self.id:
                raise ValueError(
                    f"Challenge {challenge.id} belongs to {challenge.pattern_id}, not {self.id}"
                )
        return self

    @property
    def challenge_ids(self) -> tuple[str, ...]:
        return tuple(c.id for c in self.challenges)

    @property
    def total_points(self) -> int:
        return sum(c.points for c in self.challenges)


class PatternCatalog(BaseModel):
    """
    The full, read-only pattern catalog.

    Pattern ids are unique, and challenge ids are unique across the whole
    catalog, so a challenge id alone identifies its pattern.
    """
    model_config = ConfigDict(frozen=True)

    patterns: tuple[DesignPattern, ...] = ()

    _patterns_by_id: dict[str, DesignPattern] = PrivateAttr(default_factory=dict)
    _challenges_by_id: dict[str, Challenge] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def ids_unique(self) -> "PatternCatalog":
        seen_patterns: set[str] = set()
        seen_challenges: set[str] = set()
        for pattern in self.patterns:
            if pattern.id in seen_patterns:
                raise ValueError(f"Duplicate pattern id: {pattern.id}")
            seen_patterns.add(pattern.id)
            for challenge in pattern.challenges:
                if challenge.id in seen_challenges:
                    raise ValueError(f"Duplicate challenge id: {challenge.id}")
                seen_challenges.add(challenge.id)
        return self

    def model_post_init(self, __context):
        self._patterns_by_id = {p.id: p for p in self.patterns}
        self._challenges_by_id = {
            c.id: c for p in self.patterns for c in p.challenges
        }

    def get_pattern(self, pattern_id: str) -> Optional[DesignPattern]:
        return self._patterns_by_id.get(pattern_id)

    def get_pattern_by_ids(self, category: Category | str, pattern_id: str) -> Optional[DesignPattern]:
        """Find a pattern by route parameters; both category and id must match."""
        pattern = self._patterns_by_id.get(pattern_id)
        if pattern is None or pattern.category != category:
            return None
        return pattern

    def get_challenge(self, challenge_id: str) -> Optional[Challenge]:
        return self._challenges_by_id.get(challenge_id)

    def patterns_in_category(self, category: Category | str) -> list[DesignPattern]:
        category = Category(category)
        return [p for p in self.patterns if p.category == category]

    def all_challenges(self) -> list[Challenge]:
        return [c for p in self.patterns for c in p.challenges]
