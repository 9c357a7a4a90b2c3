from typing import List, Optional
from pydantic import BaseModel
from core.models.analysis_result import AnalysisResult
from core.models.map_state import MapStatus
from core.models.report_state import ReportState
from core.models.sensor_enum import SensorStatus
from core.models.view_mode import ViewMode


class AppHealthOK(BaseModel):
    status: str
    app: str


class GeoLocationOut(BaseModel):
    lat: float
    lng: float


class SensorOut(BaseModel):
    id: str
    name: str
    location: GeoLocationOut
    rainfall_1h: float
    rainfall_24h: float
    water_level: float
    battery_level: float
    last_updated: str
    status: SensorStatus
    region: str


class ListRowOut(BaseModel):
    sensor_id: str
    status: str
    status_class: str
    name: str
    region: str
    rainfall_1h: str
    water_level: str
    battery: str
    selected: bool


class SensorListResponse(BaseModel):
    title: str
    count: int
    filter: str
    rows: List[ListRowOut]


class FilterUpdate(BaseModel):
    text: str = ""


class ShellStateResponse(BaseModel):
    view: ViewMode
    selected_sensor_id: Optional[str] = None


class ViewUpdate(BaseModel):
    view: str


class SelectionUpdate(BaseModel):
    sensor_id: str
    viewport_width: Optional[int] = None


class ViewportOut(BaseModel):
    lat: float
    lng: float
    zoom: int


class MarkerOut(BaseModel):
    sensor_id: str
    lat: float
    lng: float
    color_class: str
    popup_open: bool


class OverlayOut(BaseModel):
    name: str
    kind: str


class MapStateResponse(BaseModel):
    status: MapStatus
    error: Optional[str] = None
    viewport: ViewportOut
    markers: List[MarkerOut]
    overlays: List[OverlayOut]


class ReportResponse(BaseModel):
    state: ReportState
    result: Optional[AnalysisResult] = None
    severity: Optional[str] = None
