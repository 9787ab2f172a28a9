"""
Lesson loader utility for PatternHub.

Loads markdown lessons from the lessons/ directory.
"""

from pathlib import Path
from typing import Optional

from patternhub.config import DEFAULT_LESSONS_DIR


def _resolve(lesson_file: str, lessons_dir: Path) -> Path:
    # Catalog entries are written as "lessons/<category>/<name>.md"
    relative = Path(lesson_file)
    if relative.parts and relative.parts[0] == "lessons":
        relative = Path(*relative.parts[1:])
    return lessons_dir / relative


def load_lesson(lesson_file: str, lessons_dir: Optional[Path] = None) -> str:
    """
    Load a lesson's markdown by its catalog file path.

    Args:
        lesson_file: Path recorded on the pattern (e.g., "lessons/creational/singleton.md")
        lessons_dir: Optional custom lessons directory

    Returns:
        Markdown text of the lesson

    Raises:
        FileNotFoundError: If the lesson file doesn't exist
    """
    dir_path = lessons_dir or DEFAULT_LESSONS_DIR
    file_path = _resolve(lesson_file, dir_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Lesson not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


def get_available_lessons(lessons_dir: Optional[Path] = None) -> list[str]:
    """
    List all available lessons.

    Args:
        lessons_dir: Optional custom lessons directory

    Returns:
        Sorted lesson paths relative to the lessons directory (e.g., "creational/singleton.md")
    """
    dir_path = lessons_dir or DEFAULT_LESSONS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.relative_to(dir_path).as_posix() for p in dir_path.rglob("*.md"))
