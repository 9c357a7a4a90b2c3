import json
import logging
from pathlib import Path

from core.models.config_data import configData, mapConfigData, radarConfigData

logger = logging.getLogger(__name__)

class ConfigLoader:
    """Loads and manages dashboard configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = configData()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the dashboard_config.json file."""
        # Config file should be in the project root/config directory
        config_path = Path(__file__).parent.parent.parent / "config" / "dashboard_config.json"
        return config_path

    def load_config(self, config_path: Path | None = None):
        """Load configuration from JSON file."""
        config_path = config_path or self.get_config_path()

        # Start from defaults so every key has a value
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return

        try:
            with open(config_path, 'r', encoding="utf-8") as f:
                json_data = json.load(f)

            map_cfg = json_data.get("map", {})
            defaults = mapConfigData()
            self._config.map = mapConfigData(
                script_url=map_cfg.get("script_url", defaults.script_url),
                wait_attempts=int(map_cfg.get("wait_attempts", defaults.wait_attempts)),
                wait_interval=float(map_cfg.get("wait_interval", defaults.wait_interval)),
                probe_timeout=float(map_cfg.get("probe_timeout", defaults.probe_timeout)),
                selection_zoom=int(map_cfg.get("selection_zoom", defaults.selection_zoom)),
                tiles=map_cfg.get("tiles", defaults.tiles),
            )

            radar_cfg = json_data.get("radar", {})
            radar_defaults = radarConfigData()
            self._config.radar = radarConfigData(
                enabled=bool(radar_cfg.get("enabled", radar_defaults.enabled)),
                index_url=radar_cfg.get("index_url", radar_defaults.index_url),
                timeout=float(radar_cfg.get("timeout", radar_defaults.timeout)),
                opacity=float(radar_cfg.get("opacity", radar_defaults.opacity)),
            )

            self._config.mobile_breakpoint = int(json_data.get("mobile_breakpoint", 768))
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Invalid value in configuration file: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(map=mapConfigData(), radar=radarConfigData(), mobile_breakpoint=768)

    def get_map_config(self) -> mapConfigData:
        """Get the map widget settings."""
        return self._config.map

    def get_radar_config(self) -> radarConfigData:
        """Get the precipitation radar settings."""
        return self._config.radar

    def get_mobile_breakpoint(self) -> int:
        """Viewport width (px) below which the layout is considered narrow."""
        return self._config.mobile_breakpoint

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
