"""Tests for command-line jobs."""

import json
import logging
from pathlib import Path

import pytest

from decotracker.config import settings
from decotracker.jobs.analyze_file import run
from decotracker.models.filters import KindFilter


@pytest.fixture
def configured_catalogs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point settings at temporary catalog files."""
    deco_path = tmp_path / "decorations.json"
    obst_path = tmp_path / "obstacles.json"
    deco_path.write_text(
        json.dumps([{"Code": "18000001", "Name": "Flag"}, {"Code": "18000002", "Name": "Torch"}]),
        encoding="utf-8",
    )
    obst_path.write_text(json.dumps([{"Code": "8000001", "Name": "Rock"}]), encoding="utf-8")
    monkeypatch.setattr(settings, "decoration_catalog_source", str(deco_path))
    monkeypatch.setattr(settings, "obstacle_catalog_source", str(obst_path))


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestAnalyzeFile:
    @pytest.mark.usefixtures("configured_catalogs")
    async def test_logs_stats(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="decotracker.jobs.analyze_file")
        save = _write(tmp_path, "save.json", '{"decos": [{"data": 18000001}]}')

        exit_code = await run(save, None, KindFilter.ALL)

        assert exit_code == 0
        out = caplog.text
        assert "Owned:    1" in out
        assert "Total:    3" in out
        assert "Complete: 33%" in out

    @pytest.mark.usefixtures("configured_catalogs")
    async def test_kind_scope(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="decotracker.jobs.analyze_file")
        save = _write(tmp_path, "save.json", '{"decos": [{"data": 18000001}]}')

        await run(save, None, KindFilter.DECORATION)

        assert "Complete: 50%" in caplog.text

    @pytest.mark.usefixtures("configured_catalogs")
    async def test_compare(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="decotracker.jobs.analyze_file")
        first = _write(tmp_path, "one.json", '{"data": 18000001}')
        second = _write(tmp_path, "two.json", '[{"data": 18000001}, {"data": 8000001}]')

        exit_code = await run(first, second, KindFilter.ALL)

        assert exit_code == 0
        out = caplog.text
        assert "Both:          1" in out
        assert "Player 2 only: 1" in out
        assert "Neither:       1" in out

    @pytest.mark.usefixtures("configured_catalogs")
    async def test_invalid_save(self, tmp_path: Path) -> None:
        save = _write(tmp_path, "save.json", "{not json")

        assert await run(save, None, KindFilter.ALL) == 1

    @pytest.mark.usefixtures("configured_catalogs")
    async def test_missing_save_file(self, tmp_path: Path) -> None:
        assert await run(tmp_path / "nope.json", None, KindFilter.ALL) == 1

    async def test_no_catalogs(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "decoration_catalog_source", str(tmp_path / "a.json"))
        monkeypatch.setattr(settings, "obstacle_catalog_source", str(tmp_path / "b.json"))
        save = _write(tmp_path, "save.json", "{}")

        assert await run(save, None, KindFilter.ALL) == 1
