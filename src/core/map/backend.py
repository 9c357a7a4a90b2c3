"""
Capability interface every map widget backend implements.
MapView only talks to a backend through these calls.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.constants import DEFAULT_ZOOM, MAP_CENTER
from core.models.map_state import MarkerSpec, OverlaySpec, Viewport


class MapBackend(ABC):

    def __init__(self):
        self.markers: Dict[str, MarkerSpec] = {}
        self.overlays: List[OverlaySpec] = []
        self.viewport = Viewport(lat=MAP_CENTER[0], lng=MAP_CENTER[1], zoom=DEFAULT_ZOOM)
        self.open_popup_id: Optional[str] = None

    def render_marker(self, marker: MarkerSpec):
        self.markers[marker.sensor_id] = marker

    def remove_marker(self, sensor_id: str):
        self.markers.pop(sensor_id, None)
        if self.open_popup_id == sensor_id:
            self.open_popup_id = None

    def fly_to(self, lat: float, lng: float, zoom: int):
        self.viewport = Viewport(lat=lat, lng=lng, zoom=zoom)

    def add_overlay(self, overlay: OverlaySpec):
        """Add an overlay, replacing any existing overlay with the same name."""
        self.remove_overlay(overlay.name)
        self.overlays.append(overlay)

    def remove_overlay(self, name: str):
        self.overlays = [o for o in self.overlays if o.name != name]

    def open_popup(self, sensor_id: str):
        if sensor_id in self.markers:
            self.open_popup_id = sensor_id

    def close_popup(self):
        self.open_popup_id = None

    def clear(self):
        self.markers.clear()
        self.overlays.clear()
        self.open_popup_id = None

    @abstractmethod
    def render(self) -> Any:
        """Produce the backend's output for the current markers, overlays and viewport."""

    def mirror_into(self, other: "MapBackend") -> "MapBackend":
        """Copy markers, overlays, viewport and popup state into another backend."""
        other.markers = dict(self.markers)
        other.overlays = list(self.overlays)
        other.viewport = Viewport(lat=self.viewport.lat, lng=self.viewport.lng, zoom=self.viewport.zoom)
        other.open_popup_id = self.open_popup_id
        return other
