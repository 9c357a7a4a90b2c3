"""
Tabular view over the sensor collection with a local name/region filter.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from core.event_hub import EventHub, event_hub, SENSOR_ACTIVATED
from core.models.sensor_data import SensorRecord
from core.models.sensor_enum import SensorStatus
from core.services.sensor_store import SensorStore, sensor_store

logger = logging.getLogger(__name__)

STATUS_TEXT_CLASS = {
    SensorStatus.CRITICAL: "text-critical",
    SensorStatus.WARNING: "text-warning",
}


@dataclass
class ListRow:
    sensor_id: str
    status: str
    status_class: str
    name: str
    region: str
    rainfall_1h: str
    water_level: str
    battery: str
    selected: bool


def format_rainfall(value: float) -> str:
    return f"{value:g}mm" if value > 0 else "-"


def to_row(sensor: SensorRecord, selected_id: Optional[str]) -> ListRow:
    return ListRow(
        sensor_id=sensor.id,
        status=sensor.status.value,
        status_class=STATUS_TEXT_CLASS.get(sensor.status, "text-normal"),
        name=sensor.name,
        region=sensor.region,
        rainfall_1h=format_rainfall(sensor.rainfall_1h),
        water_level=f"{sensor.water_level:g}m",
        battery=f"{sensor.battery_level:g}%",
        selected=sensor.id == selected_id,
    )


class ListView:
    def __init__(self, store: SensorStore = sensor_store, hub: EventHub = event_hub):
        self.store = store
        self.hub = hub
        self.filter_text = ""

    def set_filter(self, text: str) -> list[SensorRecord]:
        """Update the filter (one call per keystroke) and return the visible sensors."""
        self.filter_text = text or ""
        return self.visible()

    def visible(self) -> list[SensorRecord]:
        return self.store.filter(self.filter_text)

    @property
    def count(self) -> int:
        return len(self.visible())

    @property
    def title(self) -> str:
        return f"Device List ({self.count})"

    def rows(self, selected_id: Optional[str] = None) -> list[ListRow]:
        return [to_row(s, selected_id) for s in self.visible()]

    def activate_row(self, sensor_id: str, viewport_width: Optional[int] = None) -> SensorRecord:
        """Report a row click to whoever owns selection. Raises KeyError for unknown ids."""
        sensor = self.store.get(sensor_id)
        if sensor is None:
            raise KeyError(f"Unknown sensor_id: {sensor_id}")
        self.hub.send_all_on_topic(SENSOR_ACTIVATED, {"sensor": sensor, "viewport_width": viewport_width})
        return sensor


# Global instance
list_view = ListView()
