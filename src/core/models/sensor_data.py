"""
Sensor record model.
"""

from dataclasses import dataclass
from core.models.sensor_enum import SensorStatus


@dataclass(frozen=True)
class GeoLocation:
    lat: float
    lng: float


@dataclass(frozen=True)
class SensorRecord:
    """
    Data class representing one station's telemetry snapshot.
    """
    id: str
    name: str
    location: GeoLocation
    rainfall_1h: float  # mm
    rainfall_24h: float  # mm
    water_level: float  # meters
    battery_level: float  # percentage
    last_updated: str
    status: SensorStatus
    region: str
