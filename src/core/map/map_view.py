import asyncio
import html
import logging
from typing import Any, Iterable, Optional

from core.config_loader import config_loader
from core.constants import DEFAULT_ZOOM, MAP_CENTER, SOVEREIGNTY_LABELS
from core.event_hub import EventHub, event_hub, SELECTION_CHANGED, SENSOR_ACTIVATED
from core.map.backend import MapBackend
from core.map.folium_backend import FoliumBackend
from core.map.script_loader import MapLoadError, wait_for_map_script
from core.models.map_state import MapStatus, MarkerSpec, OverlaySpec, Viewport
from core.models.sensor_data import SensorRecord
from core.models.sensor_enum import SensorStatus
from core.services.radar_client import RADAR_OVERLAY_NAME
from core.services.sensor_store import SensorStore, sensor_store

logger = logging.getLogger(__name__)


# status -> (color class, color)
STATUS_STYLE = {
    SensorStatus.CRITICAL: ("critical", "#ef4444"),
    SensorStatus.WARNING: ("warning", "#eab308"),
    SensorStatus.NORMAL: ("normal", "#10b981"),
    SensorStatus.OFFLINE: ("offline", "#4b5563"),
}


def status_style(status: SensorStatus) -> tuple[str, str]:
    return STATUS_STYLE.get(status, STATUS_STYLE[SensorStatus.OFFLINE])


def popup_html(sensor: SensorRecord) -> str:
    color_class, color = status_style(sensor.status)
    return (
        '<div class="sensor-popup" style="min-width: 200px; font-family: sans-serif;">'
        f'<h3 style="font-weight: bold; margin: 0 0 8px;">{html.escape(sensor.name)}</h3>'
        '<div style="display: grid; grid-template-columns: 1fr 1fr; gap: 8px; font-size: 13px;">'
        f'<span>Rain 1h: <b>{sensor.rainfall_1h:g}mm</b></span>'
        f'<span>Rain 24h: <b>{sensor.rainfall_24h:g}mm</b></span>'
        f'<span>Level: <b>{sensor.water_level:g}m</b></span>'
        f'<span>Bat: <b>{sensor.battery_level:g}%</b></span>'
        '</div>'
        f'<div class="status-{color_class}" style="margin-top: 12px; padding: 4px 8px; border-radius: 4px; '
        f'text-align: center; font-weight: bold; color: white; background-color: {color};">'
        f'{sensor.status.value.upper()}</div>'
        '</div>'
    )


def marker_for(sensor: SensorRecord) -> MarkerSpec:
    color_class, color = status_style(sensor.status)
    return MarkerSpec(
        sensor_id=sensor.id,
        lat=sensor.location.lat,
        lng=sensor.location.lng,
        color_class=color_class,
        color=color,
        popup_html=popup_html(sensor),
        tooltip=sensor.name,
    )


def sovereignty_overlays() -> list[OverlaySpec]:
    return [
        OverlaySpec(
            name=f"label:{text}",
            kind="label",
            lat=lat,
            lng=lng,
            text=text,
            sub_text=sub_text,
            size=size,
            z_index_offset=z_index,
        )
        for text, sub_text, lat, lng, size, z_index in SOVEREIGNTY_LABELS
    ]


class MapView:
    """
    One marker per sensor on top of a basemap, driven through a MapBackend.

    Markers are only planted once the widget is ready; every sync replaces the
    whole marker set. Selection arrives from the shell on SELECTION_CHANGED and
    marker clicks leave on SENSOR_ACTIVATED.
    """

    def __init__(self, backend: MapBackend, store: SensorStore = sensor_store, hub: EventHub = event_hub):
        self.backend = backend
        self.hub = hub
        self.status = MapStatus.LOADING
        self.load_error: Optional[str] = None
        self.sensors: tuple[SensorRecord, ...] = store.all()
        self.selected_sensor_id: Optional[str] = None
        self.radar_overlay: Optional[OverlaySpec] = None
        self._rendered_ids: list[str] = []
        self.hub.subscribe(SELECTION_CHANGED, self._on_selection_changed)

    @property
    def is_ready(self) -> bool:
        return self.status == MapStatus.READY

    @property
    def viewport(self) -> Viewport:
        return self.backend.viewport

    @property
    def marker_ids(self) -> list[str]:
        return list(self.backend.markers.keys())

    def begin_loading(self):
        self.status = MapStatus.LOADING
        self.load_error = None

    def probe(
        self,
        script_url: Optional[str] = None,
        attempts: Optional[int] = None,
        interval: Optional[float] = None,
        **probe_kwargs: Any,
    ) -> Optional[str]:
        """
        Wait for the map script. Returns the error message, or None once it is served.
        Leaves the backend and the status alone.
        """
        cfg = config_loader.get_map_config()
        try:
            wait_for_map_script(
                cfg.script_url if script_url is None else script_url,
                attempts=cfg.wait_attempts if attempts is None else attempts,
                interval=cfg.wait_interval if interval is None else interval,
                timeout=probe_kwargs.pop("timeout", cfg.probe_timeout),
                **probe_kwargs,
            )
        except MapLoadError as e:
            logger.error(f"Map initialization failed: {e}")
            return str(e)
        return None

    def finish_loading(self, error: Optional[str]) -> MapStatus:
        """Plant labels, radar and markers, then flip to READY. On error stay in ERROR."""
        if error is not None:
            self.status = MapStatus.ERROR
            self.load_error = error
            return self.status

        self.backend.clear()
        self._rendered_ids = []
        for overlay in sovereignty_overlays():
            self.backend.add_overlay(overlay)
        if self.radar_overlay is not None:
            self.backend.add_overlay(self.radar_overlay)
        self._render_markers()

        self.status = MapStatus.READY
        logger.info("Map ready")
        if self.selected_sensor_id is not None:
            self.select(self.selected_sensor_id)
        return self.status

    def initialize(self, script_url: Optional[str] = None, **probe_kwargs: Any) -> MapStatus:
        """
        Wait for the map script, then plant labels, radar and markers.
        On failure the view stays in ERROR with load_error set; nothing is raised.
        """
        self.begin_loading()
        return self.finish_loading(self.probe(script_url, **probe_kwargs))

    async def initialize_async(self, script_url: Optional[str] = None, **probe_kwargs: Any) -> MapStatus:
        """Probe in a worker thread; the backend is only changed back on the event loop."""
        self.begin_loading()
        error = await asyncio.to_thread(self.probe, script_url, **probe_kwargs)
        return self.finish_loading(error)

    def sync(self, sensors: Iterable[SensorRecord]):
        """Replace the rendered marker set with one marker per sensor."""
        self.sensors = tuple(sensors)
        if self.is_ready:
            self._render_markers()

    def _render_markers(self):
        for sensor_id in self._rendered_ids:
            self.backend.remove_marker(sensor_id)
        self._rendered_ids = []

        for sensor in self.sensors:
            self.backend.render_marker(marker_for(sensor))
            self._rendered_ids.append(sensor.id)

        if self.selected_sensor_id in self._rendered_ids:
            self.backend.open_popup(self.selected_sensor_id)
        logger.debug(f"Rendered {len(self._rendered_ids)} markers")

    def find(self, sensor_id: Optional[str]) -> Optional[SensorRecord]:
        for sensor in self.sensors:
            if sensor.id == sensor_id:
                return sensor
        return None

    def select(self, sensor_id: Optional[str]) -> Optional[SensorRecord]:
        """Center on the selected sensor and open its popup. Unknown ids close the popup only."""
        self.selected_sensor_id = sensor_id
        sensor = self.find(sensor_id)
        if sensor is None:
            self.backend.close_popup()
            return None

        if self.is_ready:
            zoom = config_loader.get_map_config().selection_zoom
            self.backend.fly_to(sensor.location.lat, sensor.location.lng, zoom)
            self.backend.open_popup(sensor.id)
        return sensor

    def activate_marker(self, sensor_id: str, viewport_width: Optional[int] = None) -> SensorRecord:
        """Report a marker click. Raises KeyError for ids without a marker."""
        sensor = self.find(sensor_id)
        if sensor is None or sensor_id not in self._rendered_ids:
            raise KeyError(f"No marker for sensor_id: {sensor_id}")
        self.hub.send_all_on_topic(SENSOR_ACTIVATED, {"sensor": sensor, "viewport_width": viewport_width})
        return sensor

    def go_home(self):
        self.backend.fly_to(MAP_CENTER[0], MAP_CENTER[1], DEFAULT_ZOOM)

    def set_radar(self, overlay: Optional[OverlaySpec]):
        """Show the precipitation radar layer, or drop it when overlay is None."""
        self.radar_overlay = overlay
        if overlay is None:
            self.backend.remove_overlay(RADAR_OVERLAY_NAME)
        elif self.is_ready:
            self.backend.add_overlay(overlay)

    def render(self) -> Any:
        return self.backend.render()

    def _on_selection_changed(self, topic, sensor_id: Optional[str]):
        self.select(sensor_id)


# Global instance
map_view = MapView(FoliumBackend(tiles=config_loader.get_map_config().tiles))
