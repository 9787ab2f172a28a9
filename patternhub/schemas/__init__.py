"""
PatternHub Schemas - Pydantic models for the design patterns learning hub.

This module exports all schema classes for:
- Catalog: patterns, challenges, categories and difficulties
- Progress: learner progress snapshot and challenge sessions
"""

# Catalog schemas
from .catalog import (
    Category,
    Difficulty,
    ChallengeType,
    Challenge,
    DesignPattern,
    PatternCatalog,
)

# Progress schemas
from .progress import (
    UserProgress,
    GameSession,
)

__all__ = [
    # Catalog
    'Category',
    'Difficulty',
    'ChallengeType',
    'Challenge',
    'DesignPattern',
    'PatternCatalog',
    # Progress
    'UserProgress',
    'GameSession',
]
