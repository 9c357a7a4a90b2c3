from fastapi import APIRouter, HTTPException

from core.models.view_mode import ViewMode
from core.services.shell_manager import shell_manager
from schemas import SelectionUpdate, ShellStateResponse, ViewUpdate

VALID_VIEW_VALUES = ", ".join([v.value for v in ViewMode])

router = APIRouter(prefix="/shell", tags=["shell"])


def current_state() -> ShellStateResponse:
    return ShellStateResponse(view=shell_manager.view, selected_sensor_id=shell_manager.selected_sensor_id)


@router.get("", response_model=ShellStateResponse)
async def get_shell_state() -> ShellStateResponse:
    """
    Get the active layout and the selected sensor id (null when nothing is selected).
    """
    return current_state()


@router.put("/view", response_model=ShellStateResponse, responses={
    400: {
        "description": "Invalid view provided.",
        "content": {
            "application/json": {
                "example": {"detail": f"Invalid view: grid. Valid values are: {VALID_VIEW_VALUES}"}
            }
        }
    }
})
async def set_view(update: ViewUpdate) -> ShellStateResponse:
    """
    Switch layout: map, list or combined.
    """
    try:
        view = ViewMode(update.view.lower())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid view: {update.view}. Valid values are: {VALID_VIEW_VALUES}"
        )
    shell_manager.set_view(view)
    return current_state()


@router.put("/selection", response_model=ShellStateResponse, responses={
    404: {
        "description": "No sensor with this id in the collection.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown sensor_id: 42"}
            }
        }
    }
})
async def set_selection(update: SelectionUpdate) -> ShellStateResponse:
    """
    Select a sensor. Map and list follow the selection.

    If viewport_width is below the mobile breakpoint while the list layout is
    active, the layout switches to map so the selection is visible.
    """
    try:
        shell_manager.select_sensor(update.sensor_id, update.viewport_width)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {update.sensor_id}")
    return current_state()


@router.delete("/selection", status_code=204)
async def clear_selection() -> None:
    """
    Clear the selection.
    """
    shell_manager.clear_selection()


@router.post("/reset", response_model=ShellStateResponse)
async def reset_session() -> ShellStateResponse:
    """
    Start a new page session: combined layout, nothing selected.
    """
    shell_manager.reset()
    return current_state()
