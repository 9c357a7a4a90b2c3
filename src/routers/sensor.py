from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException

from core.models.sensor_data import SensorRecord
from core.services.sensor_store import sensor_store
from core.services.shell_manager import shell_manager
from core.views.list_view import list_view
from schemas import FilterUpdate, ListRowOut, SensorListResponse, SensorOut, ShellStateResponse

router = APIRouter(prefix="/sensors", tags=["sensors"])

UNKNOWN_SENSOR_RESPONSE = {
    404: {
        "description": "No sensor with this id in the collection.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown sensor_id: 42"}
            }
        }
    }
}


def to_sensor_out(sensor: SensorRecord) -> SensorOut:
    data = asdict(sensor)
    return SensorOut(**data)


def current_list() -> SensorListResponse:
    rows = list_view.rows(shell_manager.selected_sensor_id)
    return SensorListResponse(
        title=list_view.title,
        count=len(rows),
        filter=list_view.filter_text,
        rows=[ListRowOut(**asdict(row)) for row in rows],
    )


@router.get("", response_model=SensorListResponse)
async def get_sensor_list() -> SensorListResponse:
    """
    Get the list view: rows matching the current filter, with the selected row flagged.
    """
    return current_list()


@router.put("/filter", response_model=SensorListResponse)
async def set_sensor_filter(update: FilterUpdate) -> SensorListResponse:
    """
    Update the list filter (sent on every keystroke).
    Matches name or region, case-insensitive substring.
    """
    list_view.set_filter(update.text)
    return current_list()


@router.get("/{sensor_id}", response_model=SensorOut, responses=UNKNOWN_SENSOR_RESPONSE)
async def get_sensor(sensor_id: str) -> SensorOut:
    """
    Get one sensor record by id.
    """
    sensor = sensor_store.get(sensor_id)
    if sensor is None:
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {sensor_id}")
    return to_sensor_out(sensor)


@router.post("/{sensor_id}/activate", response_model=ShellStateResponse, responses=UNKNOWN_SENSOR_RESPONSE)
async def activate_row(sensor_id: str, viewport_width: Optional[int] = None) -> ShellStateResponse:
    """
    Row click in the list view. The shell selects the sensor and, on a narrow
    viewport in list layout, switches to the map.
    """
    try:
        list_view.activate_row(sensor_id, viewport_width)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {sensor_id}")
    return ShellStateResponse(view=shell_manager.view, selected_sensor_id=shell_manager.selected_sensor_id)
