"""PatternHub utilities."""

from .lesson_loader import load_lesson, get_available_lessons

__all__ = ["load_lesson", "get_available_lessons"]
