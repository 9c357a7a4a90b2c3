"""AI report payload model."""
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    """
    Structured flood-risk report.
    Serialized with the generative endpoint's field names (riskLevel).
    """
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    risk_level: str = Field(alias="riskLevel")
    recommendations: List[str]


FALLBACK_RESULT = AnalysisResult(
    summary="Unable to generate analysis at this time due to connection issues.",
    riskLevel="Unknown",
    recommendations=[
        "Check manual sensor feeds.",
        "Monitor local news.",
        "Verify device connectivity.",
    ],
)
