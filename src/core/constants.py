"""Map framing constants and the mock station collection for Vietnam."""
from datetime import datetime, timezone

from core.models.sensor_data import GeoLocation, SensorRecord
from core.models.sensor_enum import SensorStatus

# Centered on the S-shape with room for Hoang Sa/Truong Sa
MAP_CENTER: tuple[float, float] = (16.0, 107.5)
DEFAULT_ZOOM = 6

# [[South, West], [North, East]]
VIETNAM_BOUNDS: tuple[tuple[float, float], tuple[float, float]] = (
    (-5.0, 90.0),
    (30.0, 130.0),
)

# (text, sub_text, lat, lng, size, z_index_offset)
SOVEREIGNTY_LABELS = [
    ("Quần Đảo Hoàng Sa", "Việt Nam", 16.3, 112.0, "normal", 1000),
    ("Quần Đảo Trường Sa", "Việt Nam", 10.0, 114.5, "normal", 1000),
    ("Biển Đông", "", 14.0, 113.0, "large", 900),
]

_LOADED_AT = datetime.now(timezone.utc).isoformat()


def _station(id, name, lat, lng, rain_1h, rain_24h, level, battery, status, region) -> SensorRecord:
    return SensorRecord(
        id=id,
        name=name,
        location=GeoLocation(lat=lat, lng=lng),
        rainfall_1h=rain_1h,
        rainfall_24h=rain_24h,
        water_level=level,
        battery_level=battery,
        last_updated=_LOADED_AT,
        status=status,
        region=region,
    )


MOCK_SENSORS: list[SensorRecord] = [
    _station("1", "Tram Ha Noi - Hoan Kiem", 21.0285, 105.8542, 0, 12.5, 4.2, 98, SensorStatus.NORMAL, "North"),
    _station("2", "Tram Ha Giang - Song Lo", 22.8233, 104.9839, 45, 120, 8.5, 85, SensorStatus.WARNING, "North"),
    _station("3", "Tram Da Nang - Song Han", 16.0544, 108.2022, 2.5, 5.0, 2.1, 92, SensorStatus.NORMAL, "Central"),
    _station("4", "Tram Hue - Huong River", 16.4637, 107.5909, 85, 210, 11.2, 76, SensorStatus.CRITICAL, "Central"),
    _station("5", "Tram TP.HCM - Nha Be", 10.7769, 106.7009, 15, 45, 1.8, 100, SensorStatus.NORMAL, "South"),
    _station("6", "Tram Can Tho - Ninh Kieu", 10.0452, 105.7469, 10, 30, 2.5, 45, SensorStatus.WARNING, "South"),
    _station("7", "Tram Dak Lak - Buon Ma Thuot", 12.6667, 108.0500, 0, 2, 3.0, 88, SensorStatus.NORMAL, "Highlands"),
    _station("8", "Tram Quang Ninh - Ha Long", 20.9599, 107.0425, 55, 150, 6.5, 60, SensorStatus.CRITICAL, "North"),
]
