"""
Achievements - Declarative badge rules over a progress snapshot.

Each Achievement pairs an id with a predicate. The evaluator checks every
rule independently against the snapshot and the catalog; the earned set is
recomputed from scratch on every call.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from patternhub.schemas import Category, PatternCatalog, UserProgress


STREAK_GOAL_DAYS = 7
SPEED_RUN_SECONDS = 5 * 60
POINT_COLLECTOR_POINTS = 1000


Predicate = Callable[[UserProgress, PatternCatalog], bool]
ProgressText = Callable[[UserProgress], str]


@dataclass(frozen=True)
class Achievement:
    """A badge unlocked when its predicate holds."""
    id: str
    title: str
    description: str
    icon: str
    predicate: Predicate
    progress_text: Optional[ProgressText] = None  # shown while locked


@dataclass(frozen=True)
class AchievementStatus:
    """Achievement with its unlock state for display."""
    achievement: Achievement
    unlocked: bool
    status_text: str


def _masters_a_category(progress: UserProgress, catalog: PatternCatalog) -> bool:
    completed = set(progress.patterns_completed)
    for category in Category:
        patterns = catalog.patterns_in_category(category)
        if patterns and all(p.id in completed for p in patterns):
            return True
    return False


def _completes_everything(progress: UserProgress, catalog: PatternCatalog) -> bool:
    challenges = catalog.all_challenges()
    completed = set(progress.challenges_completed)
    return bool(challenges) and all(c.id in completed for c in challenges)


def _is_speed_run(progress: UserProgress, catalog: PatternCatalog) -> bool:
    fastest = progress.fastest_completion_seconds
    return fastest is not None and fastest <= SPEED_RUN_SECONDS


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first-steps",
        title="First Steps",
        description="Complete your first challenge",
        icon="🥇",
        predicate=lambda progress, catalog: len(progress.challenges_completed) > 0,
    ),
    Achievement(
        id="on-fire",
        title="On Fire",
        description=f"Maintain a {STREAK_GOAL_DAYS}-day learning streak",
        icon="🔥",
        predicate=lambda progress, catalog: progress.current_streak >= STREAK_GOAL_DAYS,
        progress_text=lambda progress: f"{progress.current_streak}/{STREAK_GOAL_DAYS} days",
    ),
    Achievement(
        id="pattern-master",
        title="Pattern Master",
        description="Master all patterns in a category",
        icon="🎯",
        predicate=_masters_a_category,
    ),
    Achievement(
        id="speed-runner",
        title="Speed Runner",
        description="Complete a challenge in under 5 minutes",
        icon="⚡",
        predicate=_is_speed_run,
    ),
    Achievement(
        id="first-pattern",
        title="Pattern Apprentice",
        description="Master your first pattern",
        icon="🧩",
        predicate=lambda progress, catalog: len(progress.patterns_completed) > 0,
    ),
    Achievement(
        id="point-collector",
        title="Point Collector",
        description=f"Earn {POINT_COLLECTOR_POINTS} points",
        icon="💎",
        predicate=lambda progress, catalog: progress.total_points >= POINT_COLLECTOR_POINTS,
    ),
    Achievement(
        id="completionist",
        title="Completionist",
        description="Complete every challenge of every pattern",
        icon="🏆",
        predicate=_completes_everything,
    ),
)


class AchievementEvaluator:
    """
    Evaluate achievement rules against progress snapshots.

    Adding an achievement means adding an entry to the rules; evaluation
    itself never changes.
    """

    def __init__(self, catalog: PatternCatalog, rules: Optional[tuple[Achievement, ...]] = None):
        self.catalog = catalog
        self.rules = ACHIEVEMENTS if rules is None else rules
        ids = [rule.id for rule in self.rules]
        if len(ids) != len(set(ids)):
            raise ValueError("Achievement ids must be unique")

    def evaluate(self, progress: UserProgress) -> frozenset[str]:
        """Return the ids of every achievement whose predicate holds."""
        return frozenset(
            rule.id for rule in self.rules
            if rule.predicate(progress, self.catalog)
        )

    def ordered_ids(self, earned: frozenset[str]) -> tuple[str, ...]:
        """Earned ids in rule declaration order."""
        return tuple(rule.id for rule in self.rules if rule.id in earned)

    def unlocked(self, progress: UserProgress) -> list[Achievement]:
        earned = self.evaluate(progress)
        return [rule for rule in self.rules if rule.id in earned]

    def status(self, progress: UserProgress) -> list[AchievementStatus]:
        """Every achievement with its unlock state, for the progress page."""
        earned = self.evaluate(progress)
        statuses = []
        for rule in self.rules:
            unlocked = rule.id in earned
            if unlocked:
                text = "Unlocked"
            elif rule.progress_text is not None:
                text = rule.progress_text(progress)
            else:
                text = "Locked"
            statuses.append(AchievementStatus(achievement=rule, unlocked=unlocked, status_text=text))
        return statuses
