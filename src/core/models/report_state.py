"""Report state enumeration for tracking the AI report panel."""
from enum import Enum


class ReportState(Enum):
    """Enumeration of all possible AI report states."""
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    RESULT = "result"
