"""Tests for the achievement rules and evaluator."""

import pytest

from patternhub.classroom import ACHIEVEMENTS, Achievement, AchievementEvaluator
from patternhub.schemas import UserProgress


@pytest.fixture
def evaluator(small_catalog) -> AchievementEvaluator:
    return AchievementEvaluator(small_catalog)


class TestRules:
    """Each shipped rule in isolation."""

    def test_rule_ids(self):
        assert [rule.id for rule in ACHIEVEMENTS] == [
            "first-steps",
            "on-fire",
            "pattern-master",
            "speed-runner",
            "first-pattern",
            "point-collector",
            "completionist",
        ]

    def test_nothing_for_fresh_progress(self, evaluator):
        assert evaluator.evaluate(UserProgress()) == frozenset()

    def test_first_steps(self, evaluator):
        earned = evaluator.evaluate(UserProgress(challenges_completed=("singleton-debug",)))
        assert earned == {"first-steps"}

    @pytest.mark.parametrize("streak, unlocked", [(6, False), (7, True), (12, True)])
    def test_on_fire(self, evaluator, streak, unlocked):
        earned = evaluator.evaluate(UserProgress(current_streak=streak))
        assert ("on-fire" in earned) is unlocked

    def test_pattern_master_needs_whole_category(self, evaluator):
        assert "pattern-master" not in evaluator.evaluate(
            UserProgress(patterns_completed=("singleton",))
        )
        assert "pattern-master" in evaluator.evaluate(
            UserProgress(patterns_completed=("singleton", "builder"))
        )
        assert "pattern-master" in evaluator.evaluate(
            UserProgress(patterns_completed=("adapter",))
        )

    @pytest.mark.parametrize("seconds, unlocked", [
        (None, False), (42.0, True), (300.0, True), (300.5, False),
    ])
    def test_speed_runner(self, evaluator, seconds, unlocked):
        earned = evaluator.evaluate(UserProgress(fastest_completion_seconds=seconds))
        assert ("speed-runner" in earned) is unlocked

    def test_first_pattern(self, evaluator):
        assert "first-pattern" in evaluator.evaluate(UserProgress(patterns_completed=("builder",)))

    def test_point_collector(self, evaluator):
        assert "point-collector" not in evaluator.evaluate(UserProgress(total_points=999))
        assert "point-collector" in evaluator.evaluate(UserProgress(total_points=1000))

    def test_completionist(self, evaluator):
        almost = ("singleton-debug", "singleton-threadsafe", "meal-builder")
        assert "completionist" not in evaluator.evaluate(UserProgress(challenges_completed=almost))
        assert "completionist" in evaluator.evaluate(
            UserProgress(challenges_completed=almost + ("adapter-api",))
        )

    def test_recomputed_not_sticky(self, evaluator):
        hot = UserProgress(current_streak=7, achievements=("on-fire",))
        cold = hot.model_copy(update={"current_streak": 1})
        assert "on-fire" in evaluator.evaluate(hot)
        assert "on-fire" not in evaluator.evaluate(cold)


class TestEvaluator:

    def test_ordered_ids_follow_rule_order(self, evaluator):
        earned = frozenset({"completionist", "first-steps", "on-fire"})
        assert evaluator.ordered_ids(earned) == ("first-steps", "on-fire", "completionist")

    def test_unlocked(self, evaluator):
        progress = UserProgress(challenges_completed=("adapter-api",), patterns_completed=("adapter",))
        titles = [a.title for a in evaluator.unlocked(progress)]
        assert titles == ["First Steps", "Pattern Master", "Pattern Apprentice"]

    def test_status(self, evaluator):
        statuses = {s.achievement.id: s for s in evaluator.status(UserProgress(
            challenges_completed=("singleton-debug",), current_streak=3,
        ))}
        assert len(statuses) == len(ACHIEVEMENTS)
        assert statuses["first-steps"].unlocked
        assert statuses["first-steps"].status_text == "Unlocked"
        assert statuses["on-fire"].status_text == "3/7 days"
        assert statuses["completionist"].status_text == "Locked"

    def test_custom_rules(self, small_catalog):
        rule = Achievement(
            id="adapter-fan",
            title="Adapter Fan",
            description="Complete the adapter challenge",
            icon="🔌",
            predicate=lambda progress, catalog: "adapter-api" in progress.challenges_completed,
        )
        evaluator = AchievementEvaluator(small_catalog, rules=(rule,))
        assert evaluator.evaluate(UserProgress(challenges_completed=("adapter-api",))) == {"adapter-fan"}

    def test_custom_progress_text(self, small_catalog):
        rule = Achievement(
            id="point-hoarder",
            title="Point Hoarder",
            description="Earn 500 points",
            icon="💰",
            predicate=lambda progress, catalog: progress.total_points >= 500,
            progress_text=lambda progress: f"{progress.total_points}/500 points",
        )
        evaluator = AchievementEvaluator(small_catalog, rules=(rule,))

        locked, = evaluator.status(UserProgress(total_points=250))
        unlocked, = evaluator.status(UserProgress(total_points=700))
        assert locked.status_text == "250/500 points"
        assert unlocked.status_text == "Unlocked"

    def test_locked_without_progress_text(self, evaluator):
        speed_runner = next(
            s for s in evaluator.status(UserProgress()) if s.achievement.id == "speed-runner"
        )
        assert speed_runner.achievement.progress_text is None
        assert speed_runner.status_text == "Locked"

    def test_duplicate_rule_ids(self, small_catalog):
        with pytest.raises(ValueError):
            AchievementEvaluator(small_catalog, rules=(ACHIEVEMENTS[0], ACHIEVEMENTS[0]))
