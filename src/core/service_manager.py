# External libs
import asyncio
import logging
from typing import Optional

# Internal libs
from core.config_loader import config_loader
from core.event_hub import init_event_hub
from core.map.map_view import map_view
from core.models.map_state import MapStatus
from core.services.radar_client import create_radar_client
from core.services.sensor_store import sensor_store

logger = logging.getLogger(__name__)

class ServiceManager:

    def __init__(self):
        self.map_task: Optional[asyncio.Task] = None

    async def start_services(self, autoload_map: bool = True):
        """Bind the event hub and bring the map up in the background.
        Args:
            autoload_map: When False, skip the map script probe and radar fetch.
        """
        logger.info("Starting background services...")
        loop = asyncio.get_running_loop()

        # Init Event Hub
        init_event_hub(loop)

        map_view.sync(sensor_store.all())

        if autoload_map:
            self.map_task = loop.create_task(self.load_map())
        else:
            map_view.initialize(script_url="")

        logger.info("Background services started.")

    async def load_map(self) -> MapStatus:
        """Probe the map script and fetch the radar layer without blocking the loop."""
        if config_loader.get_radar_config().enabled:
            radar = create_radar_client()
            overlay = await asyncio.to_thread(radar.latest_overlay)
            map_view.set_radar(overlay)
        return await map_view.initialize_async()

    def stop_services(self):
        """Stop background services."""
        if self.map_task and not self.map_task.done():
            self.map_task.cancel()
        self.map_task = None

        # Handlers run inline once the loop is gone
        init_event_hub(None)
        logger.info("Background services stopped.")

service_manager = ServiceManager()
