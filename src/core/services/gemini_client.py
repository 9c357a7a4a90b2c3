import logging
from typing import Iterable, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from core.models.analysis_result import AnalysisResult, FALLBACK_RESULT
from core.models.sensor_data import SensorRecord
from core.settings import settings

logger = logging.getLogger(__name__)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(
            type=types.Type.STRING,
            description="A brief 2-sentence summary of the weather situation.",
        ),
        "riskLevel": types.Schema(
            type=types.Type.STRING,
            description="Overall risk: Low, Moderate, High, or Severe.",
        ),
        "recommendations": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="List of 3 specific actions authorities should take.",
        ),
    },
    required=["summary", "riskLevel", "recommendations"],
)


def format_sensor_line(sensor: SensorRecord) -> str:
    return (
        f"{sensor.name} ({sensor.region}): Rain 1h: {sensor.rainfall_1h:g}mm, "
        f"Rain 24h: {sensor.rainfall_24h:g}mm, Level: {sensor.water_level:g}m, "
        f"Status: {sensor.status.value}"
    )


def build_sensor_summary(sensors: Iterable[SensorRecord]) -> str:
    """One compact line of key telemetry per sensor."""
    return "\n".join(format_sensor_line(s) for s in sensors)


def build_prompt(sensors: Iterable[SensorRecord]) -> str:
    return (
        "You are a hydrological expert analyzing real-time sensor data from Vietnam.\n\n"
        "Analyze the following sensor data:\n"
        f"{build_sensor_summary(sensors)}\n\n"
        "Provide a structured JSON response with a short summary of the current situation, "
        "the overall risk level, and 3 specific recommendations for authorities."
    )


class GeminiClient:
    """Flood-risk analysis through the Gemini text generation API."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        self.api_key = api_key
        self.model = model
        self._client: Optional[genai.Client] = None
        if not api_key:
            logger.warning("No Gemini API key configured - AI reports will use the fallback result")

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        """Send prompt with the report schema and return the raw JSON text."""
        response = self._get_client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        if not response.text:
            raise ValueError("No data returned")
        return response.text

    def analyze_flood_risk(self, sensors: Iterable[SensorRecord]) -> AnalysisResult:
        """
        Analyze all sensors. Never raises: any failure (missing key, network,
        malformed JSON, empty text) yields a copy of FALLBACK_RESULT.
        """
        try:
            text = self.generate(build_prompt(sensors))
            return AnalysisResult.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Gemini returned a malformed report: {e}")
        except Exception as e:
            logger.error(f"Gemini analysis error: {e}")
        return FALLBACK_RESULT.model_copy(deep=True)


# Global instance
gemini_client = GeminiClient(settings.gemini_api_key, model=settings.gemini_model)
