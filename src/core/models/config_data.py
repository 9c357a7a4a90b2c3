from dataclasses import dataclass, field


@dataclass
class mapConfigData:
    script_url: str = "https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"
    wait_attempts: int = 50
    wait_interval: float = 0.2
    probe_timeout: float = 5.0
    selection_zoom: int = 10
    tiles: str = "OpenStreetMap"

@dataclass
class radarConfigData:
    enabled: bool = True
    index_url: str = "https://api.rainviewer.com/public/weather-maps.json"
    timeout: float = 5.0
    opacity: float = 0.6

@dataclass
class configData:
    map: mapConfigData = field(default_factory=mapConfigData)
    radar: radarConfigData = field(default_factory=radarConfigData)
    mobile_breakpoint: int = 768
