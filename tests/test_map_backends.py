from core.constants import MOCK_SENSORS
from core.event_hub import EventHub
from core.map.folium_backend import FoliumBackend, click_script, controls_html
from core.map.geojson_backend import GeoJSONBackend
from core.map.map_view import MapView, marker_for
from core.models.map_state import OverlaySpec


def ready_view(backend):
    view = MapView(backend, hub=EventHub())
    view.initialize(script_url="")
    return view


class TestGeoJSONBackend:
    """Test the FeatureCollection render."""

    def test_features(self):
        view = ready_view(GeoJSONBackend())
        data = view.render()
        assert data["type"] == "FeatureCollection"
        assert [f["id"] for f in data["features"]] == [s.id for s in MOCK_SENSORS]

    def test_coordinates_are_lng_lat(self):
        backend = GeoJSONBackend()
        backend.render_marker(marker_for(MOCK_SENSORS[0]))
        feature = backend.render()["features"][0]
        assert feature["geometry"]["coordinates"] == [105.8542, 21.0285]
        assert feature["properties"]["color_class"] == "normal"

    def test_popup_flag_and_viewport(self):
        view = ready_view(GeoJSONBackend())
        view.select("8")
        data = view.render()
        opened = [f["id"] for f in data["features"] if f["properties"]["popup_open"]]
        assert opened == ["8"]
        assert data["viewport"] == {"lat": 20.9599, "lng": 107.0425, "zoom": 10}

    def test_overlay_replaced_by_name(self):
        backend = GeoJSONBackend()
        backend.add_overlay(OverlaySpec(name="radar", kind="tiles", url="a"))
        backend.add_overlay(OverlaySpec(name="radar", kind="tiles", url="b"))
        assert [o["url"] for o in backend.render()["overlays"]] == ["b"]

    def test_popup_only_for_known_markers(self):
        backend = GeoJSONBackend()
        backend.open_popup("1")
        assert backend.open_popup_id is None

    def test_removing_marker_closes_its_popup(self):
        backend = GeoJSONBackend()
        backend.render_marker(marker_for(MOCK_SENSORS[0]))
        backend.open_popup("1")
        backend.remove_marker("1")
        assert backend.open_popup_id is None

    def test_mirror_into(self):
        source = ready_view(FoliumBackend()).backend
        mirror = source.mirror_into(GeoJSONBackend())
        assert list(mirror.markers) == list(source.markers)
        assert mirror.viewport == source.viewport


class TestFoliumBackend:
    """Test the Leaflet document."""

    def test_render_contains_markers(self):
        html = ready_view(FoliumBackend()).render()
        assert "leaflet" in html.lower()
        assert "Tram Hue - Huong River" in html
        assert "sensor-pin-critical" in html

    def test_render_labels(self):
        html = ready_view(FoliumBackend()).render()
        assert html.count("map-label") >= 3

    def test_click_script_wired(self):
        html = ready_view(FoliumBackend()).render()
        assert "/api/map/markers/4/activate" in html
        assert "reportActivation" in html

    def test_controls(self):
        html = ready_view(FoliumBackend()).render()
        assert 'id="map-home"' in html
        assert 'id="map-legend"' in html

    def test_without_urls(self):
        html = ready_view(FoliumBackend(activate_url=None, home_url=None)).render()
        assert "reportActivation" not in html
        assert "map-home" not in html

    def test_radar_tile_layer(self):
        view = ready_view(FoliumBackend())
        view.set_radar(OverlaySpec(name="radar", kind="tiles", url="https://radar/{z}/{x}/{y}.png", attribution="RainViewer"))
        assert "https://radar/{z}/{x}/{y}.png" in view.render()

    def test_click_script(self):
        script = click_script([("marker_abc", "3")], "/activate/{sensor_id}")
        assert "marker_abc.on('click'" in script
        assert '"/activate/3"' in script

    def test_controls_html(self):
        html = controls_html("/home")
        assert '"/home"' in html
        assert "Nguy hiểm" in html
