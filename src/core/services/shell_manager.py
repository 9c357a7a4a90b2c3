import logging
from typing import Optional

from core.config_loader import config_loader
from core.event_hub import EventHub, event_hub, SELECTION_CHANGED, SENSOR_ACTIVATED
from core.models.sensor_data import SensorRecord
from core.models.view_mode import ViewMode
from core.services.sensor_store import SensorStore, sensor_store

logger = logging.getLogger(__name__)


class ShellManager:
    """
    Owns the two pieces of page-session state: the active layout and the
    selected sensor. Map and list views never change these directly; they
    publish SENSOR_ACTIVATED and the shell decides.
    """

    def __init__(self, store: SensorStore = sensor_store, hub: EventHub = event_hub):
        self.store = store
        self.hub = hub
        self.view: ViewMode = ViewMode.COMBINED
        self.selected_sensor_id: Optional[str] = None
        self.hub.subscribe(SENSOR_ACTIVATED, self._on_sensor_activated)

    def set_view(self, view: ViewMode):
        if view == self.view:
            return
        self.view = view
        logger.info(f"Layout switched to {view.value}")

    def is_narrow(self, viewport_width: Optional[int]) -> bool:
        if viewport_width is None:
            return False
        return viewport_width < config_loader.get_mobile_breakpoint()

    def select_sensor(self, sensor_id: str, viewport_width: Optional[int] = None) -> SensorRecord:
        """
        Select a sensor by id.
        On a narrow viewport in list layout, switch to map so the selection is visible.
        Raises KeyError if the id is not in the collection.
        """
        sensor = self.store.get(sensor_id)
        if sensor is None:
            raise KeyError(f"Unknown sensor_id: {sensor_id}")

        self.selected_sensor_id = sensor.id
        logger.info(f"Selected sensor {sensor.id} ({sensor.name})")
        self.hub.send_all_on_topic(SELECTION_CHANGED, sensor.id)

        if self.view == ViewMode.LIST and self.is_narrow(viewport_width):
            self.set_view(ViewMode.MAP)
        return sensor

    def clear_selection(self):
        if self.selected_sensor_id is None:
            return
        self.selected_sensor_id = None
        self.hub.send_all_on_topic(SELECTION_CHANGED, None)

    def reset(self):
        """Start a new page session."""
        self.clear_selection()
        self.set_view(ViewMode.COMBINED)

    def _on_sensor_activated(self, topic, message: dict):
        sensor: SensorRecord = message["sensor"]
        try:
            self.select_sensor(sensor.id, message.get("viewport_width"))
        except KeyError:
            logger.warning(f"Ignoring activation of unknown sensor {sensor.id}")


# Global instance
shell_manager = ShellManager()
