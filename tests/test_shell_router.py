"""
Tests for the shell endpoints: layout and selection.
"""
import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


class TestShellState:
    """Test GET /api/shell"""

    def test_default_state(self) -> None:
        response = client.get("/api/shell")
        assert response.status_code == 200
        assert response.json() == {"view": "combined", "selected_sensor_id": None}


class TestShellView:
    """Test PUT /api/shell/view - switch layout"""

    @pytest.mark.parametrize("view", ["map", "list", "combined", "MAP"])
    def test_set_view(self, view) -> None:
        response = client.put("/api/shell/view", json={"view": view})
        assert response.status_code == 200
        assert response.json()["view"] == view.lower()

    def test_set_view_invalid(self) -> None:
        """Test that an unknown layout returns 400"""
        response = client.put("/api/shell/view", json={"view": "grid"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid view: grid. Valid values are: map, list, combined"


class TestShellSelection:
    """Test PUT/DELETE /api/shell/selection"""

    def test_select(self) -> None:
        response = client.put("/api/shell/selection", json={"sensor_id": "8"})
        assert response.status_code == 200
        assert response.json()["selected_sensor_id"] == "8"

    def test_select_unknown(self) -> None:
        response = client.put("/api/shell/selection", json={"sensor_id": "99"})
        assert response.status_code == 404
        assert client.get("/api/shell").json()["selected_sensor_id"] is None

    def test_select_narrow_in_list(self) -> None:
        client.put("/api/shell/view", json={"view": "list"})
        response = client.put("/api/shell/selection", json={"sensor_id": "8", "viewport_width": 600})
        assert response.json() == {"view": "map", "selected_sensor_id": "8"}

    def test_clear_selection(self) -> None:
        """Test that clearing the selection closes the popup"""
        client.put("/api/shell/selection", json={"sensor_id": "8"})
        response = client.delete("/api/shell/selection")
        assert response.status_code == 204
        assert client.get("/api/shell").json()["selected_sensor_id"] is None
        assert not any(m["popup_open"] for m in client.get("/api/map").json()["markers"])

    def test_reset(self) -> None:
        client.put("/api/shell/view", json={"view": "map"})
        client.put("/api/shell/selection", json={"sensor_id": "1"})
        response = client.post("/api/shell/reset")
        assert response.json() == {"view": "combined", "selected_sensor_id": None}
