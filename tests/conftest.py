"""Pytest configuration and fixtures for test suite."""

import pytest
from core.event_hub import EventHub
from core.map.geojson_backend import GeoJSONBackend
from core.map.map_view import map_view, MapView
from core.models.report_state import ReportState
from core.services.report_manager import report_manager
from core.services.sensor_store import SensorStore, sensor_store
from core.services.shell_manager import shell_manager, ShellManager
from core.views.list_view import list_view, ListView


@pytest.fixture(autouse=True)
def reset_dashboard_state():
    """Start every test from a fresh page session with the map ready.

    The map script probe is skipped (empty URL) so no test touches the network.
    """
    shell_manager.reset()
    list_view.set_filter("")
    report_manager.state = ReportState.IDLE
    report_manager.result = None

    map_view.selected_sensor_id = None
    map_view.set_radar(None)
    map_view.sync(sensor_store.all())
    map_view.initialize(script_url="")
    map_view.go_home()

    yield

    shell_manager.reset()
    list_view.set_filter("")
    report_manager.state = ReportState.IDLE
    report_manager.result = None


class Dashboard:
    """An isolated hub/store/shell/list/map graph for tests that should not touch the globals."""

    def __init__(self, records):
        self.hub = EventHub()
        self.store = SensorStore(records)
        self.shell = ShellManager(store=self.store, hub=self.hub)
        self.list = ListView(store=self.store, hub=self.hub)
        self.map = MapView(GeoJSONBackend(), store=self.store, hub=self.hub)


@pytest.fixture
def dashboard():
    """Isolated dashboard over the mock collection, map ready."""
    board = Dashboard(sensor_store.all())
    board.map.initialize(script_url="")
    return board


@pytest.fixture
def empty_dashboard():
    """Isolated dashboard over an empty collection, map ready."""
    board = Dashboard([])
    board.map.initialize(script_url="")
    return board
