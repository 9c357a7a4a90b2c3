"""Layout enumeration for the dashboard shell."""
from enum import Enum


class ViewMode(Enum):
    """Enumeration of the three mutually exclusive dashboard layouts."""
    MAP = "map"
    LIST = "list"
    COMBINED = "combined"
