"""
PatternHub Classroom - Runtime components for catalog and learner progress.

This module provides:
- CatalogLoader: Load the pattern catalog
- ProgressStorage: Persist the progress record
- ProgressStore: Own and mutate learner progress
- StatisticsCalculator: Derive completion numbers
- AchievementEvaluator: Evaluate achievement rules
- ProgressContext: Facade for UI components
"""

from .loader import (
    CatalogLoader,
    load_catalog,
)

from .storage import (
    ProgressStorage,
    InMemoryProgressStorage,
    SqliteProgressStorage,
)

from .achievements import (
    Achievement,
    AchievementStatus,
    AchievementEvaluator,
    ACHIEVEMENTS,
)

from .progress import (
    ProgressStore,
    ProgressUpdateError,
    UnknownPatternError,
    UnknownChallengeError,
    ChallengeMismatchError,
    PointsMismatchError,
)

from .statistics import (
    StatisticsCalculator,
    PatternProgress,
)

from .context import (
    ProgressContext,
    ProviderError,
    progress_provider,
    use_progress,
)

__all__ = [
    # Loader
    "CatalogLoader",
    "load_catalog",
    # Storage
    "ProgressStorage",
    "InMemoryProgressStorage",
    "SqliteProgressStorage",
    # Achievements
    "Achievement",
    "AchievementStatus",
    "AchievementEvaluator",
    "ACHIEVEMENTS",
    # Progress
    "ProgressStore",
    "ProgressUpdateError",
    "UnknownPatternError",
    "UnknownChallengeError",
    "ChallengeMismatchError",
    "PointsMismatchError",
    # Statistics
    "StatisticsCalculator",
    "PatternProgress",
    # Context
    "ProgressContext",
    "ProviderError",
    "progress_provider",
    "use_progress",
]
