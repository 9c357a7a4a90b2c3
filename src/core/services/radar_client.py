"""
Precipitation radar tiles from the RainViewer public API.

Best effort: if the index cannot be fetched or parsed the overlay is simply
left off the map.
"""
import logging
from typing import Optional

import requests

from core.config_loader import config_loader
from core.models.map_state import OverlaySpec

logger = logging.getLogger(__name__)

RADAR_OVERLAY_NAME = "radar"
# size/z/x/y/color-scheme/smooth_snow
TILE_SUFFIX = "/256/{z}/{x}/{y}/2/1_1.png"


class RadarClient:
    def __init__(self, index_url: str, timeout: float = 5.0, opacity: float = 0.6, session: Optional[requests.Session] = None):
        self.index_url = index_url
        self.timeout = timeout
        self.opacity = opacity
        self.session = session or requests.Session()

    def latest_overlay(self) -> Optional[OverlaySpec]:
        """Tile overlay for the most recent past radar frame, or None if unavailable."""
        try:
            response = self.session.get(self.index_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            host = data["host"]
            frames = data["radar"]["past"]
            if not frames:
                logger.warning("Radar index has no past frames, skipping radar layer")
                return None
            path = frames[-1]["path"]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Radar layer unavailable: {e}")
            return None

        return OverlaySpec(
            name=RADAR_OVERLAY_NAME,
            kind="tiles",
            url=f"{host}{path}{TILE_SUFFIX}",
            attribution="RainViewer",
            opacity=self.opacity,
        )


def create_radar_client() -> RadarClient:
    cfg = config_loader.get_radar_config()
    return RadarClient(cfg.index_url, timeout=cfg.timeout, opacity=cfg.opacity)
