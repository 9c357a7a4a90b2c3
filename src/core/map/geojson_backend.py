from dataclasses import asdict
from typing import Any

from core.map.backend import MapBackend


class GeoJSONBackend(MapBackend):
    """Renders the map as a GeoJSON FeatureCollection for clients that draw their own widget."""

    def render(self) -> dict[str, Any]:
        features = []
        for marker in self.markers.values():
            features.append({
                "type": "Feature",
                "id": marker.sensor_id,
                "geometry": {"type": "Point", "coordinates": [marker.lng, marker.lat]},
                "properties": {
                    "sensor_id": marker.sensor_id,
                    "color_class": marker.color_class,
                    "color": marker.color,
                    "tooltip": marker.tooltip,
                    "popup_html": marker.popup_html,
                    "popup_open": marker.sensor_id == self.open_popup_id,
                },
            })
        return {
            "type": "FeatureCollection",
            "features": features,
            "viewport": asdict(self.viewport),
            "overlays": [asdict(o) for o in self.overlays],
        }
