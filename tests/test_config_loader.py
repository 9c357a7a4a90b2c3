import json

import pytest
from core.config_loader import config_loader


class TestConfigLoader:
    """Test configuration loading and access."""

    @pytest.fixture(autouse=True)
    def restore_config(self):
        yield
        config_loader.reload_config()

    def test_config_loads(self):
        """Test that the shipped config loads the map settings."""
        map_cfg = config_loader.get_map_config()
        assert map_cfg.wait_attempts == 50
        assert map_cfg.wait_interval == pytest.approx(0.2)
        assert map_cfg.script_url.startswith("https://")

    def test_mobile_breakpoint(self):
        """Test the narrow viewport breakpoint."""
        assert config_loader.get_mobile_breakpoint() == 768

    def test_radar_config(self):
        """Test that radar settings exist."""
        radar = config_loader.get_radar_config()
        assert isinstance(radar.enabled, bool)
        assert "rainviewer" in radar.index_url

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test that a missing config file falls back to defaults."""
        config_loader.load_config(tmp_path / "missing.json")
        assert config_loader.get_map_config().selection_zoom == 10
        assert config_loader.get_mobile_breakpoint() == 768

    def test_invalid_json_uses_defaults(self, tmp_path):
        """Test that an unparsable config file falls back to defaults."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_map_config().wait_attempts == 50

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        """Test that keys absent from the file keep their default."""
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"map": {"wait_attempts": 3}, "mobile_breakpoint": 600}), encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_map_config().wait_attempts == 3
        assert config_loader.get_map_config().wait_interval == pytest.approx(0.2)
        assert config_loader.get_mobile_breakpoint() == 600

    def test_invalid_value_uses_defaults(self, tmp_path):
        """Test that a non-numeric value falls back to defaults."""
        path = tmp_path / "wrong.json"
        path.write_text(json.dumps({"map": {"wait_attempts": "many"}}), encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_map_config().wait_attempts == 50

    def test_singleton(self):
        """Test that ConfigLoader is a singleton."""
        from core.config_loader import ConfigLoader
        assert ConfigLoader() is config_loader
