"""Sensor status enumeration for type-safe status references."""
from enum import Enum


class SensorStatus(Enum):
    """Enumeration of all sensor states reported by a station."""
    NORMAL = "Normal"
    WARNING = "Warning"
    CRITICAL = "Critical"
    OFFLINE = "Offline"
