"""
ProgressContext - One read/update surface for UI components.

Combines the catalog, ProgressStore, StatisticsCalculator and
AchievementEvaluator. UI code obtains the facade with use_progress(),
which only works inside a progress_provider() block.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Optional

from patternhub.config import Settings, load_settings
from patternhub.schemas import Category, DesignPattern, GameSession, PatternCatalog, UserProgress
from patternhub.utils import load_lesson

from .achievements import Achievement, AchievementEvaluator, AchievementStatus
from .loader import CatalogLoader
from .progress import ProgressStore
from .statistics import StatisticsCalculator
from .storage import ProgressStorage, SqliteProgressStorage


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """The progress facade was used outside a progress_provider block."""


class ProgressContext:
    """Facade over the progress engine."""

    def __init__(
        self,
        catalog: PatternCatalog,
        store: ProgressStore,
        lessons_dir: Optional[Path] = None,
    ):
        self.catalog = catalog
        self.store = store
        self.statistics = StatisticsCalculator(catalog)
        self.lessons_dir = lessons_dir

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        storage: Optional[ProgressStorage] = None,
    ) -> "ProgressContext":
        """
        Wire the default engine.

        Args:
            settings: Runtime settings (default: from environment)
            storage: Persistence adapter (default: SQLite at settings.progress_db)
        """
        settings = settings or load_settings()
        catalog = CatalogLoader(settings.catalog_path).load()
        storage = storage or SqliteProgressStorage(settings.progress_db)
        store = ProgressStore(catalog, storage)
        return cls(catalog, store, lessons_dir=settings.lessons_dir)

    # -------------------------------------------------------------------------
    # Read surface
    # -------------------------------------------------------------------------

    @property
    def patterns(self) -> tuple[DesignPattern, ...]:
        return self.catalog.patterns

    @property
    def user_progress(self) -> UserProgress:
        return self.store.user_progress

    @property
    def current_session(self) -> Optional[GameSession]:
        return self.store.current_session

    @property
    def evaluator(self) -> AchievementEvaluator:
        return self.store.evaluator

    @property
    def achievements(self) -> list[Achievement]:
        """Achievements unlocked by the current snapshot."""
        return self.evaluator.unlocked(self.user_progress)

    def achievement_status(self) -> list[AchievementStatus]:
        return self.evaluator.status(self.user_progress)

    def get_pattern_by_ids(self, category: Category | str, pattern_id: str) -> Optional[DesignPattern]:
        return self.catalog.get_pattern_by_ids(category, pattern_id)

    def load_lesson(self, pattern_id: str) -> Optional[str]:
        """Lesson markdown for a pattern, or None if it has none on disk."""
        pattern = self.catalog.get_pattern(pattern_id)
        if pattern is None or not pattern.lesson_file:
            return None
        try:
            return load_lesson(pattern.lesson_file, self.lessons_dir)
        except FileNotFoundError:
            logger.info(f"No lesson file for {pattern_id}: {pattern.lesson_file}")
            return None

    # -------------------------------------------------------------------------
    # Update surface
    # -------------------------------------------------------------------------

    def update_progress(self, pattern_id: str, challenge_id: str, points: Optional[int] = None) -> bool:
        return self.store.update_progress(pattern_id, challenge_id, points)

    def reset_progress(self):
        self.store.reset_progress()

    def start_session(self, pattern_id: str, challenge_id: str) -> GameSession:
        return self.store.start_session(pattern_id, challenge_id)

    def record_attempt(self) -> Optional[GameSession]:
        return self.store.record_attempt()

    def end_session(self, score: int) -> Optional[GameSession]:
        return self.store.end_session(score)


_current_context: ContextVar[Optional[ProgressContext]] = ContextVar(
    "patternhub_progress_context", default=None
)


@contextmanager
def progress_provider(context: ProgressContext) -> Iterator[ProgressContext]:
    """Make `context` the facade returned by use_progress() inside the block."""
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)


def use_progress() -> ProgressContext:
    """
    Return the facade of the enclosing progress_provider.

    Raises:
        ProviderError: If called outside any progress_provider block
    """
    context = _current_context.get()
    if context is None:
        raise ProviderError("use_progress must be used within a progress_provider")
    return context
