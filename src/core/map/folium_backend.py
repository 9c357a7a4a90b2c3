import json
import logging
from typing import Optional

import folium

from core.constants import VIETNAM_BOUNDS
from core.map.backend import MapBackend
from core.models.map_state import MarkerSpec, OverlaySpec

logger = logging.getLogger(__name__)

LABEL_COLOR = "#ce1126"
LABEL_CASING = "#ffffff"
LABEL_FONT_SIZES = {"small": "11px", "normal": "16px", "large": "22px"}


def pin_html(marker: MarkerSpec) -> str:
    """Rotated teardrop pin showing the sensor id, with a status dot in the corner."""
    return f"""
        <div class="sensor-pin sensor-pin-{marker.color_class}" style="
          background-color: #333; color: white; width: 30px; height: 40px;
          border-radius: 50% 50% 50% 0; transform: rotate(-45deg);
          display: flex; align-items: center; justify-content: center;
          border: 2px solid white; box-shadow: 2px 2px 4px rgba(0,0,0,0.4);
          position: relative;">
          <div style="transform: rotate(45deg); font-weight: bold; font-family: sans-serif; font-size: 14px;">{marker.sensor_id}</div>
          <div style="position: absolute; bottom: -2px; right: -2px; width: 8px; height: 8px;
            border-radius: 50%; background-color: {marker.color}; border: 1px solid white;"></div>
        </div>
    """


def label_html(overlay: OverlaySpec) -> str:
    font_size = LABEL_FONT_SIZES.get(overlay.size, "12px")
    shadow = ", ".join(
        f"{x}px {y}px {LABEL_CASING}"
        for x, y in ((2, 0), (-2, 0), (0, 2), (0, -2), (1, 1), (-1, -1), (1, -1), (-1, 1))
    )
    sub = ""
    if overlay.sub_text:
        sub = (
            f'<div style="color: {LABEL_COLOR}; font-family: Arial, sans-serif; font-weight: 700; '
            f'text-transform: uppercase; font-size: 10px; opacity: 0.9;">({overlay.sub_text})</div>'
        )
    return (
        '<div style="display: flex; flex-direction: column; align-items: center;">'
        f'<div style="color: {LABEL_COLOR}; text-shadow: {shadow}; font-family: Arial, Helvetica, sans-serif; '
        f'font-weight: 900; text-transform: uppercase; letter-spacing: 0.05em; white-space: nowrap; '
        f'pointer-events: none; font-size: {font_size};">{overlay.text}</div>'
        f'{sub}</div>'
    )


def click_script(handlers: list[tuple[str, str]], activate_url: str) -> str:
    """
    Wire marker clicks back to the service once folium's own script has defined the markers.
    activate_url contains a {sensor_id} placeholder.
    """
    lines = []
    for var_name, sensor_id in handlers:
        url = json.dumps(activate_url.format(sensor_id=sensor_id))
        lines.append(
            f"  {var_name}.on('click', function() {{ reportActivation({url}); }});"
        )
    return (
        "<script>\n"
        "function reportActivation(url) {\n"
        "  var width = (window.parent || window).innerWidth;\n"
        "  fetch(url + '?viewport_width=' + width, {method: 'POST'})\n"
        "    .then(function() { (window.parent || window).location.reload(); });\n"
        "}\n"
        "document.addEventListener('DOMContentLoaded', function() {\n"
        + "\n".join(lines)
        + "\n});\n</script>"
    )


def controls_html(home_url: str) -> str:
    """Home button (top left) and status legend (bottom right) drawn over the map."""
    return f"""
<div style="position: absolute; top: 80px; left: 10px; z-index: 1000;">
  <button id="map-home" title="Về toàn cảnh Việt Nam"
    onclick="fetch({json.dumps(home_url)}, {{method: 'POST'}}).then(function() {{ location.reload(); }});"
    style="width: 32px; height: 32px; background: white; border: 1px solid #cbd5e1; border-radius: 4px; cursor: pointer;">&#8962;</button>
</div>
<div id="map-legend" style="position: absolute; bottom: 24px; right: 56px; z-index: 1000; background: rgba(255,255,255,0.95);
  padding: 12px; border-radius: 4px; border: 1px solid #cbd5e1; font: 12px sans-serif;">
  <div style="font-weight: bold; text-transform: uppercase; margin-bottom: 4px;">Trạng thái</div>
  <div><span style="display: inline-block; width: 12px; height: 12px; border-radius: 50%; background: #10b981;"></span> Bình thường</div>
  <div><span style="display: inline-block; width: 12px; height: 12px; border-radius: 50%; background: #eab308;"></span> Cảnh báo</div>
  <div><span style="display: inline-block; width: 12px; height: 12px; border-radius: 50%; background: #ef4444;"></span> Nguy hiểm</div>
</div>
"""


class FoliumBackend(MapBackend):
    """Leaflet map rendered to a standalone HTML document through folium."""

    def __init__(
        self,
        tiles: str = "OpenStreetMap",
        activate_url: Optional[str] = "/api/map/markers/{sensor_id}/activate",
        home_url: Optional[str] = "/api/map/home",
    ):
        super().__init__()
        self.tiles = tiles
        self.activate_url = activate_url
        self.home_url = home_url

    def build(self) -> folium.Map:
        (south, west), (north, east) = VIETNAM_BOUNDS
        fmap = folium.Map(
            location=[self.viewport.lat, self.viewport.lng],
            zoom_start=self.viewport.zoom,
            tiles=self.tiles,
            control_scale=True,
            max_bounds=True,
            min_lat=south,
            max_lat=north,
            min_lon=west,
            max_lon=east,
        )

        has_tile_overlay = False
        for overlay in self.overlays:
            if overlay.kind == "tiles":
                folium.TileLayer(
                    tiles=overlay.url,
                    attr=overlay.attribution,
                    name=overlay.name,
                    overlay=True,
                    control=True,
                    opacity=overlay.opacity,
                ).add_to(fmap)
                has_tile_overlay = True
            elif overlay.kind == "label":
                folium.Marker(
                    location=[overlay.lat, overlay.lng],
                    icon=folium.DivIcon(
                        html=label_html(overlay),
                        icon_size=(200, 50),
                        icon_anchor=(100, 25),
                        class_name="map-label",
                    ),
                    interactive=False,
                    z_index_offset=overlay.z_index_offset,
                ).add_to(fmap)
            else:
                logger.warning(f"Unknown overlay kind '{overlay.kind}' for {overlay.name}, skipping")

        group = folium.FeatureGroup(name="Sensors")
        handlers: list[tuple[str, str]] = []
        for marker in self.markers.values():
            fmarker = folium.Marker(
                location=[marker.lat, marker.lng],
                icon=folium.DivIcon(
                    html=pin_html(marker),
                    icon_size=(30, 42),
                    icon_anchor=(15, 42),
                    popup_anchor=(0, -40),
                    class_name="custom-pin",
                ),
                popup=folium.Popup(
                    marker.popup_html,
                    max_width=300,
                    show=marker.sensor_id == self.open_popup_id,
                ),
                tooltip=marker.tooltip or None,
            )
            fmarker.add_to(group)
            handlers.append((fmarker.get_name(), marker.sensor_id))
        group.add_to(fmap)

        if has_tile_overlay:
            folium.LayerControl(collapsed=True).add_to(fmap)

        if self.activate_url and handlers:
            fmap.get_root().html.add_child(folium.Element(click_script(handlers, self.activate_url)))
        if self.home_url:
            fmap.get_root().html.add_child(folium.Element(controls_html(self.home_url)))
        return fmap

    def render(self) -> str:
        return self.build().get_root().render()
