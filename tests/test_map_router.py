"""
Tests for the map endpoints: state, renders, marker clicks, home and reload.
"""
from fastapi.testclient import TestClient

from core.map.map_view import map_view
from core.models.map_state import MapStatus
from main import app

client = TestClient(app)


class TestMapState:
    """Test GET /api/map"""

    def test_ready_state(self) -> None:
        response = client.get("/api/map")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["error"] is None
        assert data["viewport"] == {"lat": 16.0, "lng": 107.5, "zoom": 6}
        assert [m["sensor_id"] for m in data["markers"]] == ["1", "2", "3", "4", "5", "6", "7", "8"]

    def test_marker_colors(self) -> None:
        markers = {m["sensor_id"]: m for m in client.get("/api/map").json()["markers"]}
        assert markers["4"]["color_class"] == "critical"
        assert markers["6"]["color_class"] == "warning"
        assert markers["7"]["color_class"] == "normal"

    def test_overlays(self) -> None:
        overlays = client.get("/api/map").json()["overlays"]
        assert {"name": "label:Quần Đảo Hoàng Sa", "kind": "label"} in overlays


class TestMapRenders:
    """Test GET /api/map/geojson and GET /api/map/html"""

    def test_geojson(self) -> None:
        response = client.get("/api/map/geojson")
        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "FeatureCollection"
        assert len(data["features"]) == 8

    def test_html_ready(self) -> None:
        response = client.get("/api/map/html")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/api/map/markers/1/activate" in response.text

    def test_html_loading(self) -> None:
        """Test that the loading placeholder refreshes itself"""
        map_view.status = MapStatus.LOADING
        response = client.get("/api/map/html")
        assert response.status_code == 200
        assert 'id="map-loading"' in response.text
        assert 'http-equiv="refresh"' in response.text

    def test_html_error(self) -> None:
        """Test that a failed load shows the error panel with a reload button"""
        map_view.status = MapStatus.ERROR
        map_view.load_error = "Failed to connect to map servers."
        response = client.get("/api/map/html")
        assert response.status_code == 503
        assert 'id="map-error"' in response.text
        assert 'id="map-reload"' in response.text
        assert "Failed to connect to map servers." in response.text
        assert "Lỗi tải bản đồ" in response.text


class TestMapActions:
    """Test POST endpoints on the map"""

    def test_activate_marker(self) -> None:
        """Test that a marker click selects the sensor and highlights its row"""
        response = client.post("/api/map/markers/2/activate")
        assert response.status_code == 200
        assert response.json()["selected_sensor_id"] == "2"
        rows = client.get("/api/sensors").json()["rows"]
        assert [row["sensor_id"] for row in rows if row["selected"]] == ["2"]
        assert client.get("/api/map").json()["viewport"]["lat"] == 22.8233

    def test_activate_marker_unknown(self) -> None:
        response = client.post("/api/map/markers/99/activate")
        assert response.status_code == 404

    def test_home(self) -> None:
        client.post("/api/map/markers/2/activate")
        response = client.post("/api/map/home")
        assert response.json()["viewport"] == {"lat": 16.0, "lng": 107.5, "zoom": 6}
        assert client.get("/api/shell").json()["selected_sensor_id"] == "2"

    def test_reload(self, monkeypatch) -> None:
        """Test that reload retries the script probe and recovers"""
        map_view.status = MapStatus.ERROR
        map_view.load_error = "Timeout: map script failed to load from server."
        monkeypatch.setattr("core.map.map_view.wait_for_map_script", lambda url, **kwargs: 1)
        response = client.post("/api/map/reload")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["error"] is None
        assert len(data["markers"]) == 8
