import asyncio
import logging
from typing import Iterable, Optional

from core.models.analysis_result import AnalysisResult
from core.models.report_state import ReportState
from core.models.sensor_data import SensorRecord
from core.services.gemini_client import GeminiClient, gemini_client

logger = logging.getLogger(__name__)


def risk_severity(risk_level: str) -> str:
    """'high' for High/Severe labels, 'moderate' for anything else."""
    if "High" in risk_level or "Severe" in risk_level:
        return "high"
    return "moderate"


class ReportManager:
    """
    On-demand AI report with three mutually exclusive states:
    IDLE (prompt shown), IN_FLIGHT (request running), RESULT (report shown).
    """

    def __init__(self, client: GeminiClient = gemini_client):
        self.client = client
        self.state = ReportState.IDLE
        self.result: Optional[AnalysisResult] = None

    def get_state(self) -> ReportState:
        return self.state

    def _begin(self):
        if self.state == ReportState.IN_FLIGHT:
            raise RuntimeError("A report is already being generated.")
        self.state = ReportState.IN_FLIGHT
        self.result = None
        logger.info("AI report requested")

    def _finish(self, result: AnalysisResult) -> AnalysisResult:
        self.result = result
        self.state = ReportState.RESULT
        logger.info(f"AI report ready (risk level: {result.risk_level})")
        return result

    async def generate(self, sensors: Iterable[SensorRecord]) -> AnalysisResult:
        """
        Run the analysis in a worker thread so the event loop keeps serving requests.
        If the request fails or is cancelled the panel goes back to IDLE.
        """
        self._begin()
        completed = False
        try:
            result = await asyncio.to_thread(self.client.analyze_flood_risk, list(sensors))
            completed = True
        finally:
            if not completed:
                self.state = ReportState.IDLE
        return self._finish(result)

    def reset(self):
        """Discard the current result and go back to the prompt."""
        if self.state == ReportState.IN_FLIGHT:
            raise RuntimeError("Cannot reset while a report is being generated.")
        self.state = ReportState.IDLE
        self.result = None


# Global instance
report_manager = ReportManager()
