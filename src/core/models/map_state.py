"""Map view models shared by the map backends."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MapStatus(Enum):
    """Enumeration of map widget initialization states."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class Viewport:
    lat: float
    lng: float
    zoom: int


@dataclass
class MarkerSpec:
    """Everything a backend needs to draw one sensor marker."""
    sensor_id: str
    lat: float
    lng: float
    color_class: str
    color: str
    popup_html: str
    tooltip: str = ""


@dataclass
class OverlaySpec:
    """
    A layer drawn on top of the basemap.
    kind is "tiles" (url is a tile template) or "label" (text at lat/lng).
    """
    name: str
    kind: str
    url: str = ""
    attribution: str = ""
    opacity: float = 1.0
    lat: Optional[float] = None
    lng: Optional[float] = None
    text: str = ""
    sub_text: str = ""
    size: str = "normal"
    z_index_offset: int = 0
