"""Tests for version lookup."""

from collections.abc import Generator
from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest

from tzstamp.utils.core import version as version_module
from tzstamp.utils.core.version import FALLBACK_VERSION, get_project_version, get_version


@pytest.fixture(autouse=True)
def clear_version_cache() -> Generator[None, None, None]:
    """Clear the cached version around each test."""
    get_project_version.cache_clear()
    yield
    get_project_version.cache_clear()


def _not_installed(_name: str) -> str:
    raise PackageNotFoundError(_name)


class TestVersion:
    """Test version resolution order."""

    def test_installed_metadata_is_preferred(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the distribution metadata wins."""
        monkeypatch.setattr(version_module, "version", lambda _name: "9.9.9")

        assert get_version() == "9.9.9"

    def test_pyproject_fallback(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test reading pyproject.toml when the package is not installed."""
        _ = (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "tzstamp"\nversion = "1.2.3"\n', encoding="utf-8"
        )
        monkeypatch.setattr(version_module, "version", _not_installed)
        monkeypatch.chdir(tmp_path)

        assert get_version() == "1.2.3"

    def test_invalid_pyproject_uses_fallback(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test the fallback version when pyproject.toml has no version."""
        _ = (tmp_path / "pyproject.toml").write_text('[project]\nname = "tzstamp"\n', encoding="utf-8")
        monkeypatch.setattr(version_module, "version", _not_installed)
        monkeypatch.chdir(tmp_path)

        assert get_version() == FALLBACK_VERSION
