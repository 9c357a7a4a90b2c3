from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from core.map.geojson_backend import GeoJSONBackend
from core.map.map_view import map_view
from core.models.map_state import MapStatus
from core.services.shell_manager import shell_manager
from core.views.pages import render_map_status
from schemas import MapStateResponse, MarkerOut, OverlayOut, ShellStateResponse, ViewportOut

router = APIRouter(prefix="/map", tags=["map"])


def current_map_state() -> MapStateResponse:
    backend = map_view.backend
    viewport = backend.viewport
    return MapStateResponse(
        status=map_view.status,
        error=map_view.load_error,
        viewport=ViewportOut(lat=viewport.lat, lng=viewport.lng, zoom=viewport.zoom),
        markers=[
            MarkerOut(
                sensor_id=marker.sensor_id,
                lat=marker.lat,
                lng=marker.lng,
                color_class=marker.color_class,
                popup_open=marker.sensor_id == backend.open_popup_id,
            )
            for marker in backend.markers.values()
        ],
        overlays=[OverlayOut(name=overlay.name, kind=overlay.kind) for overlay in backend.overlays],
    )


@router.get("", response_model=MapStateResponse)
async def get_map_state() -> MapStateResponse:
    """
    Get the map widget state: load status, viewport, rendered markers and overlays.
    Markers are empty until the map is ready.
    """
    return current_map_state()


@router.get("/geojson")
async def get_map_geojson() -> dict[str, Any]:
    """
    Get the rendered markers as a GeoJSON FeatureCollection (lng, lat order),
    with the viewport and overlays attached.
    """
    return map_view.backend.mirror_into(GeoJSONBackend()).render()


@router.get("/html", response_class=HTMLResponse, responses={
    503: {
        "description": "The map script could not be loaded. The body is the error panel with a reload button.",
        "content": {"text/html": {}}
    }
})
async def get_map_html() -> HTMLResponse:
    """
    Get the map document shown in the dashboard frame.
    While loading, a spinner page that refreshes itself is returned instead.
    """
    if map_view.status == MapStatus.READY:
        return HTMLResponse(map_view.render())
    if map_view.status == MapStatus.ERROR:
        return HTMLResponse(render_map_status(map_view.status, map_view.load_error), status_code=503)
    return HTMLResponse(render_map_status(map_view.status))


@router.post("/markers/{sensor_id}/activate", response_model=ShellStateResponse, responses={
    404: {
        "description": "No marker for this sensor id.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown sensor_id: 42"}
            }
        }
    }
})
async def activate_marker(sensor_id: str, viewport_width: Optional[int] = None) -> ShellStateResponse:
    """
    Marker click. The shell selects the sensor, which centers the map and opens its popup.
    """
    try:
        map_view.activate_marker(sensor_id, viewport_width)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {sensor_id}")
    return ShellStateResponse(view=shell_manager.view, selected_sensor_id=shell_manager.selected_sensor_id)


@router.post("/home", response_model=MapStateResponse)
async def go_home() -> MapStateResponse:
    """
    Fly back to the whole-country view. The selection is kept.
    """
    map_view.go_home()
    return current_map_state()


@router.post("/reload", response_model=MapStateResponse)
async def reload_map() -> MapStateResponse:
    """
    Retry loading the map script after an error.
    """
    await map_view.initialize_async()
    return current_map_state()
