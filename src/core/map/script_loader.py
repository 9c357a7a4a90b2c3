"""
Readiness check for the map widget's script.

The browser cannot draw anything until the map library is served, so the map
view polls the script URL a fixed number of times before giving up.
"""
import logging
import time
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)


class MapLoadError(Exception):
    """The map widget could not be initialized."""


def wait_for_map_script(
    url: str,
    attempts: int = 50,
    interval: float = 0.2,
    timeout: float = 5.0,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Poll url until it answers with a success status.

    Returns the number of attempts used (0 when url is empty, i.e. no check configured).
    Raises MapLoadError on a connection failure or when attempts run out.
    """
    if not url:
        return 0

    http = session or requests.Session()
    for attempt in range(1, attempts + 1):
        try:
            response = http.get(url, timeout=timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to load map script from {url}: {e}")
            raise MapLoadError("Failed to connect to map servers.") from e

        if response.ok:
            logger.info(f"Map script available after {attempt} attempt(s)")
            return attempt

        logger.debug(f"Map script not ready (HTTP {response.status_code}), attempt {attempt}/{attempts}")
        if attempt < attempts:
            sleep(interval)

    raise MapLoadError("Timeout: map script failed to load from server.")
