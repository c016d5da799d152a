"""
Tests for CacheSettings loading.
"""

import pytest

from normgraph import CacheSettings, load_settings


class TestCacheSettings:
    """Settings dataclass and YAML loading."""

    def test_defaults(self):
        """Defaults fix the open behaviours."""
        settings = CacheSettings()
        assert settings.sort_variable_keys is True
        assert settings.null_clears_reference is True
        assert settings.missing_location_style == "field"

    def test_from_dict_fills_missing_keys(self):
        """Absent keys take defaults."""
        settings = CacheSettings.from_dict({"missing_location_style": "path"})
        assert settings.missing_location_style == "path"
        assert settings.sort_variable_keys is True

    def test_invalid_style_raises(self):
        """Only field and path styles exist."""
        with pytest.raises(ValueError):
            CacheSettings(missing_location_style="tree")

    def test_save_and_load(self, tmp_path):
        """YAML round trip."""
        path = tmp_path / "normgraph.yaml"
        CacheSettings(sort_variable_keys=False, null_clears_reference=False).save(path)
        settings = load_settings(path)
        assert settings == CacheSettings(sort_variable_keys=False, null_clears_reference=False)

    def test_missing_file_returns_none(self, tmp_path):
        """No file, no settings."""
        assert load_settings(tmp_path / "absent.yaml") is None

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty YAML document is all defaults."""
        path = tmp_path / "normgraph.yaml"
        path.write_text("")
        assert load_settings(path) == CacheSettings()
