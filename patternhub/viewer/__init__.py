"""
PatternHub Viewer - Rendering components for progress display.

This module provides:
- Overview stat cards
- Pattern mastery cards
- Achievement badges
- Challenge cards
"""

from .progress import (
    CATEGORY_COLORS,
    get_progress_css,
    render_stat_card,
    render_stats_grid,
    render_pattern_progress_card,
    render_pattern_progress,
    render_achievement_card,
    render_achievements,
    render_challenge_card,
)

__all__ = [
    "CATEGORY_COLORS",
    "get_progress_css",
    "render_stat_card",
    "render_stats_grid",
    "render_pattern_progress_card",
    "render_pattern_progress",
    "render_achievement_card",
    "render_achievements",
    "render_challenge_card",
]
