"""Tests for the helper functions of the maintenance scripts."""

import importlib.util
import sys
from pathlib import Path

import pytest

from patternhub.classroom import SqliteProgressStorage
from patternhub.schemas import UserProgress


SCRIPTS_DIR = Path(__file__).parent.parent / "scripts"


def _load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def validate_catalog():
    return _load_script("validate_catalog")


@pytest.fixture(scope="module")
def export_progress():
    return _load_script("export_progress")


class TestValidateCatalog:

    def test_category_report(self, validate_catalog, small_catalog):
        report = validate_catalog.category_report(small_catalog)
        assert report["creational"] == {"patterns": 2, "challenges": 3, "points": 450}
        assert report["structural"] == {"patterns": 1, "challenges": 1, "points": 250}
        assert report["behavioral"] == {"patterns": 0, "challenges": 0, "points": 0}

    def test_find_missing_lessons(self, validate_catalog, small_catalog, tmp_path):
        assert validate_catalog.find_missing_lessons(small_catalog, tmp_path) == [
            "singleton", "builder", "adapter",
        ]

        (tmp_path / "creational").mkdir()
        (tmp_path / "creational" / "singleton.md").write_text("# Singleton", encoding="utf-8")
        assert validate_catalog.find_missing_lessons(small_catalog, tmp_path) == ["builder", "adapter"]

    def test_main_applies_log_level(self, validate_catalog, monkeypatch, tmp_path):
        configured = []
        monkeypatch.setenv("PATTERNHUB_LOG_LEVEL", "debug")
        monkeypatch.setattr(validate_catalog, "configure_logging", configured.append)
        monkeypatch.setattr(sys, "argv", ["validate_catalog.py", "--lessons", str(tmp_path)])

        validate_catalog.main()

        assert [settings.log_level for settings in configured] == ["DEBUG"]


class TestExportProgress:

    def test_mastery_frame(self, export_progress, small_catalog):
        progress = UserProgress(
            challenges_completed=("singleton-debug", "meal-builder"),
            patterns_completed=("builder",),
            total_points=250,
        )
        df = export_progress.build_mastery_frame(small_catalog, progress)

        assert list(df["pattern_id"]) == ["singleton", "builder", "adapter"]
        assert list(df["mastery_percent"]) == [50, 100, 0]
        assert list(df["is_mastered"]) == [False, True, False]
        assert df["points_earned"].sum() == 250

    def test_main_applies_log_level(self, export_progress, monkeypatch, tmp_path):
        db_path = tmp_path / "progress.db"
        SqliteProgressStorage(db_path).save(UserProgress())
        output = tmp_path / "mastery.csv"
        configured = []
        monkeypatch.setenv("PATTERNHUB_LOG_LEVEL", "warning")
        monkeypatch.setattr(export_progress, "configure_logging", configured.append)
        monkeypatch.setattr(sys, "argv", [
            "export_progress.py", "--db", str(db_path), "--output", str(output),
        ])

        export_progress.main()

        assert [settings.log_level for settings in configured] == ["WARNING"]
        assert output.read_text(encoding="utf-8").startswith("pattern_id,")
