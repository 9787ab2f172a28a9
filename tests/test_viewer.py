"""Tests for the progress HTML renderers."""

from patternhub.classroom import ACHIEVEMENTS, AchievementStatus, PatternProgress
from patternhub.schemas import Challenge
from patternhub.viewer import (
    get_progress_css,
    render_achievement_card,
    render_achievements,
    render_challenge_card,
    render_pattern_progress,
    render_pattern_progress_card,
    render_stats_grid,
)


def _row(**overrides) -> PatternProgress:
    values = dict(
        pattern_id="singleton",
        name="Singleton",
        category="creational",
        completed_challenges=1,
        total_challenges=4,
        points_earned=100,
        points_available=750,
        mastery_percent=25,
        is_mastered=False,
    )
    values.update(overrides)
    return PatternProgress(**values)


class TestStats:

    def test_css(self):
        css = get_progress_css()
        assert "<style>" in css
        assert ".achievement-card.locked" in css

    def test_stats_grid(self):
        html = render_stats_grid({
            "patterns_completed": 1,
            "total_patterns": 23,
            "completion_percent": 4,
            "challenges_completed": 4,
            "total_challenges": 92,
            "total_points": 750,
            "points_available": 20000,
            "current_streak": 2,
            "achievements": 3,
        })
        assert html.count('class="stat-card"') == 5
        assert "4/92" in html
        assert "1/23" in html
        assert "Day Streak" in html


class TestPatternCards:

    def test_in_progress_card(self):
        html = render_pattern_progress_card(_row())
        assert 'class="pattern-progress-card"' in html
        assert "width:25%" in html
        assert "1/4 challenges" in html
        assert "Mastered" not in html

    def test_mastered_card(self):
        html = render_pattern_progress_card(_row(completed_challenges=4, mastery_percent=100, is_mastered=True))
        assert 'class="pattern-progress-card completed"' in html
        assert "🏆 Mastered!" in html

    def test_escapes_names(self):
        html = render_pattern_progress_card(_row(name="<Chain>"))
        assert "&lt;Chain&gt;" in html

    def test_all_cards(self):
        html = render_pattern_progress([_row(), _row(pattern_id="builder", name="Builder")])
        assert html.count("pattern-progress-card") == 2


class TestAchievementCards:

    def test_locked_and_unlocked(self):
        first_steps, on_fire = ACHIEVEMENTS[0], ACHIEVEMENTS[1]
        unlocked = render_achievement_card(AchievementStatus(first_steps, True, "Unlocked"))
        locked = render_achievement_card(AchievementStatus(on_fire, False, "2/7 days"))

        assert 'class="achievement-card"' in unlocked
        assert 'data-achievement-id="first-steps"' in unlocked
        assert 'class="achievement-card locked"' in locked
        assert "2/7 days" in locked

    def test_grid(self):
        statuses = [AchievementStatus(a, False, "Locked") for a in ACHIEVEMENTS]
        html = render_achievements(statuses)
        assert html.startswith('<div class="achievements-grid">')
        assert html.count("achievement-card locked") == len(ACHIEVEMENTS)


class TestChallengeCard:

    def test_challenge_card(self):
        challenge = Challenge(
            id="singleton-debug", title="Fix the Broken Singleton", difficulty="beginner",
            type="debug", points=100,
        )
        open_card = render_challenge_card(challenge, completed=False)
        done_card = render_challenge_card(challenge, completed=True)

        assert "beginner · debug · 100 pts" in open_card
        assert "✅" not in open_card
        assert 'class="challenge-card completed"' in done_card
        assert "✅" in done_card
