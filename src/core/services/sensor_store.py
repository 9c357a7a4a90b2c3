import logging
from typing import Iterable, Iterator, Optional

from core.constants import MOCK_SENSORS
from core.models.sensor_data import SensorRecord

logger = logging.getLogger(__name__)


def matches_filter(sensor: SensorRecord, text: str) -> bool:
    """Case-insensitive substring match over name and region."""
    needle = text.lower()
    return needle in sensor.name.lower() or needle in sensor.region.lower()


class SensorStore:
    """
    Read-only collection of sensor records.
    Would be replaced by a live feed; for now it holds a static snapshot.
    """

    def __init__(self, records: Iterable[SensorRecord]):
        self._records: tuple[SensorRecord, ...] = tuple(records)
        self._by_id: dict[str, SensorRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise ValueError(f"Duplicate sensor id: {record.id}")
            self._by_id[record.id] = record
        logger.info(f"SensorStore loaded {len(self._records)} sensors")

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SensorRecord]:
        return iter(self._records)

    def all(self) -> tuple[SensorRecord, ...]:
        return self._records

    def get(self, sensor_id: str) -> Optional[SensorRecord]:
        return self._by_id.get(sensor_id)

    def filter(self, text: str) -> list[SensorRecord]:
        """Records whose name or region contains text, in collection order."""
        if not text:
            return list(self._records)
        return [s for s in self._records if matches_filter(s, text)]


# Global instance
sensor_store = SensorStore(MOCK_SENSORS)
