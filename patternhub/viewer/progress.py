"""
Progress renderer - Stats, pattern mastery cards and achievement badges.

Provides:
- Overview stat cards
- Pattern mastery cards with progress bars
- Achievement badge grid
- Challenge cards for pattern pages
"""

import html

from patternhub.classroom import AchievementStatus, PatternProgress
from patternhub.schemas import Challenge


CATEGORY_COLORS = {
    "creational": "#1976D2",
    "structural": "#388E3C",
    "behavioral": "#F57C00",
}


def get_progress_css() -> str:
    """Get CSS styles for progress display."""
    return """
    <style>
    .stats-grid {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(160px, 1fr));
        gap: 1em;
        margin: 1em 0;
    }
    .stat-card {
        background: white;
        border: 1px solid #e0e0e0;
        border-radius: 12px;
        padding: 1em;
        text-align: center;
    }
    .stat-number {
        font-size: 1.6em;
        font-weight: 700;
        color: #333;
    }
    .stat-label {
        font-size: 0.85em;
        color: #888;
    }
    .pattern-progress-card {
        background: #fafafa;
        border: 1px solid #eee;
        border-radius: 8px;
        padding: 1em;
        margin: 0.8em 0;
    }
    .pattern-progress-card.completed {
        border-color: #388E3C;
        background: #f1f8e9;
    }
    .pattern-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        font-weight: 600;
    }
    .category-badge {
        font-size: 0.75em;
        color: white;
        border-radius: 10px;
        padding: 0.2em 0.7em;
    }
    .progress-bar {
        background: #e0e0e0;
        border-radius: 4px;
        height: 8px;
        margin: 0.6em 0;
        overflow: hidden;
    }
    .progress-fill {
        background: #1976D2;
        height: 100%;
    }
    .pattern-stats {
        display: flex;
        justify-content: space-between;
        font-size: 0.85em;
        color: #666;
    }
    .achievements-grid {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(200px, 1fr));
        gap: 1em;
    }
    .achievement-card {
        border: 1px solid #e0e0e0;
        border-radius: 12px;
        padding: 1em;
        text-align: center;
    }
    .achievement-card.locked {
        opacity: 0.5;
        filter: grayscale(1);
    }
    .achievement-icon {
        font-size: 2em;
    }
    .achievement-status {
        font-size: 0.8em;
        color: #888;
        margin-top: 0.5em;
    }
    .challenge-card {
        border-left: 4px solid #1976D2;
        padding: 0.6em 1em;
        margin: 0.6em 0;
        background: #fafafa;
    }
    .challenge-card.completed {
        border-left-color: #388E3C;
    }
    .challenge-meta {
        font-size: 0.8em;
        color: #888;
    }
    </style>
    """


def render_stat_card(label: str, value: str) -> str:
    return (
        '<div class="stat-card">'
        f'<div class="stat-number">{html.escape(value)}</div>'
        f'<div class="stat-label">{html.escape(label)}</div>'
        '</div>'
    )


def render_stats_grid(summary: dict) -> str:
    """
    Render the overview stat cards.

    Args:
        summary: Output of StatisticsCalculator.summary()

    Returns:
        HTML string for the grid
    """
    cards = [
        ("Total Points", str(summary["total_points"])),
        ("Challenges", f'{summary["challenges_completed"]}/{summary["total_challenges"]}'),
        ("Patterns Mastered", f'{summary["patterns_completed"]}/{summary["total_patterns"]}'),
        ("Day Streak", str(summary["current_streak"])),
        ("Achievements", str(summary["achievements"])),
    ]
    parts = ['<div class="stats-grid">']
    parts.extend(render_stat_card(label, value) for label, value in cards)
    parts.append('</div>')
    return ''.join(parts)


def render_pattern_progress_card(row: PatternProgress) -> str:
    """
    Render one pattern mastery card.

    Args:
        row: PatternProgress row

    Returns:
        HTML string for the card
    """
    css_class = "pattern-progress-card completed" if row.is_mastered else "pattern-progress-card"
    color = CATEGORY_COLORS.get(row.category, "#666")

    parts = [f'<div class="{css_class}">']
    parts.append('<div class="pattern-header">')
    parts.append(f'<span>{html.escape(row.name)}</span>')
    parts.append(
        f'<span class="category-badge" style="background:{color};">'
        f'{html.escape(row.category)}</span>'
    )
    parts.append('</div>')

    parts.append('<div class="progress-bar">')
    parts.append(f'<div class="progress-fill" style="width:{row.mastery_percent}%;"></div>')
    parts.append('</div>')

    parts.append('<div class="pattern-stats">')
    parts.append(f'<span>{row.completed_challenges}/{row.total_challenges} challenges</span>')
    parts.append(f'<span>{row.points_earned} pts earned</span>')
    parts.append(f'<span>{row.mastery_percent}%</span>')
    parts.append('</div>')

    if row.is_mastered:
        parts.append('<div class="completion-badge">🏆 Mastered!</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_pattern_progress(rows: list[PatternProgress]) -> str:
    """Render mastery cards for all patterns."""
    return ''.join(render_pattern_progress_card(row) for row in rows)


def render_achievement_card(status: AchievementStatus) -> str:
    achievement = status.achievement
    css_class = "achievement-card" if status.unlocked else "achievement-card locked"
    return (
        f'<div class="{css_class}" data-achievement-id="{html.escape(achievement.id)}">'
        f'<div class="achievement-icon">{achievement.icon}</div>'
        f'<h4>{html.escape(achievement.title)}</h4>'
        f'<p>{html.escape(achievement.description)}</p>'
        f'<div class="achievement-status">{html.escape(status.status_text)}</div>'
        '</div>'
    )


def render_achievements(statuses: list[AchievementStatus]) -> str:
    """Render the achievement badge grid."""
    parts = ['<div class="achievements-grid">']
    parts.extend(render_achievement_card(status) for status in statuses)
    parts.append('</div>')
    return ''.join(parts)


def render_challenge_card(challenge: Challenge, completed: bool) -> str:
    """
    Render a challenge summary for a pattern page.

    Args:
        challenge: Challenge to display
        completed: Whether the learner has completed it

    Returns:
        HTML string for the card
    """
    css_class = "challenge-card completed" if completed else "challenge-card"
    done = " ✅" if completed else ""
    return (
        f'<div class="{css_class}">'
        f'<strong>{html.escape(challenge.title)}</strong>{done}'
        f'<div>{html.escape(challenge.description)}</div>'
        f'<div class="challenge-meta">{challenge.difficulty.value} · '
        f'{challenge.type.value} · {challenge.points} pts</div>'
        '</div>'
    )
