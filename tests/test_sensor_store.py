from dataclasses import replace

import pytest
from core.constants import MOCK_SENSORS
from core.services.sensor_store import SensorStore, matches_filter


class TestSensorStore:
    """Test the sensor collection."""

    def test_mock_collection(self):
        """Test that the mock collection has eight unique stations."""
        store = SensorStore(MOCK_SENSORS)
        assert len(store) == 8
        assert [s.id for s in store] == ["1", "2", "3", "4", "5", "6", "7", "8"]

    def test_duplicate_id_rejected(self):
        """Test that two records with the same id cannot be loaded."""
        duplicate = replace(MOCK_SENSORS[1], id=MOCK_SENSORS[0].id)
        with pytest.raises(ValueError, match="Duplicate sensor id"):
            SensorStore([MOCK_SENSORS[0], duplicate])

    def test_get(self):
        """Test lookup by id."""
        store = SensorStore(MOCK_SENSORS)
        assert store.get("4").name == "Tram Hue - Huong River"
        assert store.get("99") is None

    def test_empty_collection(self):
        """Test that an empty collection is valid."""
        store = SensorStore([])
        assert len(store) == 0
        assert store.filter("") == []
        assert store.filter("north") == []


class TestSensorFilter:
    """Test the name/region substring filter."""

    @pytest.mark.parametrize("text,expected", [
        ("", ["1", "2", "3", "4", "5", "6", "7", "8"]),
        ("north", ["1", "2", "8"]),
        ("NORTH", ["1", "2", "8"]),
        ("Central", ["3", "4"]),
        ("hue", ["4"]),
        ("song", ["2", "3"]),
        ("mekong", []),
    ])
    def test_filter(self, text, expected):
        """Test filtering matches name or region, case-insensitive, in collection order."""
        store = SensorStore(MOCK_SENSORS)
        assert [s.id for s in store.filter(text)] == expected

    def test_matches_filter_region(self):
        """Test that region alone is enough to match."""
        assert matches_filter(MOCK_SENSORS[6], "highlands")
        assert not matches_filter(MOCK_SENSORS[6], "south")
