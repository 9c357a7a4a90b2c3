from fastapi import APIRouter, HTTPException

from core.services.report_manager import report_manager, risk_severity
from core.services.sensor_store import sensor_store
from schemas import ReportResponse

router = APIRouter(prefix="/report", tags=["report"])

IN_FLIGHT_RESPONSE = {
    409: {
        "description": "A report is already being generated.",
        "content": {
            "application/json": {
                "example": {"detail": "A report is already being generated."}
            }
        }
    }
}


def current_report() -> ReportResponse:
    result = report_manager.result
    return ReportResponse(
        state=report_manager.get_state(),
        result=result,
        severity=risk_severity(result.risk_level) if result else None,
    )


@router.get("", response_model=ReportResponse)
async def get_report() -> ReportResponse:
    """
    Get the report panel state (idle, in_flight or result) and the last result.
    """
    return current_report()


@router.post("", response_model=ReportResponse, responses=IN_FLIGHT_RESPONSE)
async def generate_report() -> ReportResponse:
    """
    Analyze the full sensor collection with Gemini and return the report.

    Connection or parsing failures do not fail the request: the result is the
    fallback report with risk level "Unknown".
    """
    try:
        await report_manager.generate(sensor_store.all())
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return current_report()


@router.delete("", status_code=204, responses=IN_FLIGHT_RESPONSE)
async def reset_report() -> None:
    """
    Discard the report and show the prompt again.
    """
    try:
        report_manager.reset()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
