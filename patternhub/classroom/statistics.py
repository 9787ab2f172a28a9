"""
StatisticsCalculator - Aggregate numbers for progress displays.

Provides:
- Overall and per-pattern completion percentages
- Catalog totals for "X of Y" displays
- Per-category and per-pattern breakdowns
"""

from dataclasses import dataclass

from patternhub.schemas import Category, DesignPattern, PatternCatalog, UserProgress


def round_percent(numerator: int, denominator: int) -> int:
    """Percentage rounded half-up to an integer; 0 when denominator is 0."""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


@dataclass
class PatternProgress:
    """One row of the pattern mastery table."""
    pattern_id: str
    name: str
    category: str
    completed_challenges: int
    total_challenges: int
    points_earned: int
    points_available: int
    mastery_percent: int
    is_mastered: bool


class StatisticsCalculator:
    """
    Pure derivations over the catalog and a progress snapshot.

    Holds no state besides the catalog; never mutates progress.
    """

    def __init__(self, catalog: PatternCatalog):
        self.catalog = catalog

    def total_patterns(self) -> int:
        return len(self.catalog.patterns)

    def total_challenges_available(self) -> int:
        return sum(len(p.challenges) for p in self.catalog.patterns)

    def total_points_available(self) -> int:
        return sum(p.total_points for p in self.catalog.patterns)

    def overall_completion_percent(self, progress: UserProgress) -> int:
        return round_percent(len(progress.patterns_completed), self.total_patterns())

    def completed_challenge_count(self, progress: UserProgress, pattern_id: str) -> int:
        pattern = self.catalog.get_pattern(pattern_id)
        if pattern is None:
            return 0
        completed = set(progress.challenges_completed)
        return sum(1 for cid in pattern.challenge_ids if cid in completed)

    def pattern_mastery_percent(self, progress: UserProgress, pattern_id: str) -> int:
        """Share of the pattern's challenges completed; 0 for unknown patterns."""
        pattern = self.catalog.get_pattern(pattern_id)
        if pattern is None:
            return 0
        return round_percent(
            self.completed_challenge_count(progress, pattern_id),
            len(pattern.challenges),
        )

    def points_earned_for_pattern(self, progress: UserProgress, pattern_id: str) -> int:
        pattern = self.catalog.get_pattern(pattern_id)
        if pattern is None:
            return 0
        completed = set(progress.challenges_completed)
        return sum(c.points for c in pattern.challenges if c.id in completed)

    def _pattern_row(self, progress: UserProgress, pattern: DesignPattern) -> PatternProgress:
        return PatternProgress(
            pattern_id=pattern.id,
            name=pattern.name,
            category=pattern.category.value,
            completed_challenges=self.completed_challenge_count(progress, pattern.id),
            total_challenges=len(pattern.challenges),
            points_earned=self.points_earned_for_pattern(progress, pattern.id),
            points_available=pattern.total_points,
            mastery_percent=self.pattern_mastery_percent(progress, pattern.id),
            is_mastered=pattern.id in progress.patterns_completed,
        )

    def pattern_progress(self, progress: UserProgress) -> list[PatternProgress]:
        """Mastery rows for every pattern, in catalog order."""
        return [self._pattern_row(progress, p) for p in self.catalog.patterns]

    def category_completion(self, progress: UserProgress) -> dict[str, dict[str, int]]:
        """
        Completed/total patterns per category.

        Returns:
            {category: {"completed": n, "total": m, "percent": p}}
        """
        completed = set(progress.patterns_completed)
        result = {}
        for category in Category:
            patterns = self.catalog.patterns_in_category(category)
            done = sum(1 for p in patterns if p.id in completed)
            result[category.value] = {
                "completed": done,
                "total": len(patterns),
                "percent": round_percent(done, len(patterns)),
            }
        return result

    def summary(self, progress: UserProgress) -> dict:
        """Headline numbers for the progress overview."""
        return {
            "patterns_completed": len(progress.patterns_completed),
            "total_patterns": self.total_patterns(),
            "completion_percent": self.overall_completion_percent(progress),
            "challenges_completed": len(progress.challenges_completed),
            "total_challenges": self.total_challenges_available(),
            "total_points": progress.total_points,
            "points_available": self.total_points_available(),
            "current_streak": progress.current_streak,
            "achievements": len(progress.achievements),
        }
