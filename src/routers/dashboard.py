from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from core.services.report_manager import report_manager, risk_severity
from core.services.shell_manager import shell_manager
from core.settings import settings
from core.views.list_view import list_view
from core.views.pages import render_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard() -> HTMLResponse:
    """
    Dashboard page for the active layout: map, list, or both with the AI report.
    """
    result = report_manager.result
    page = render_dashboard(
        view=shell_manager.view,
        rows=list_view.rows(shell_manager.selected_sensor_id),
        filter_text=list_view.filter_text,
        report_state=report_manager.get_state(),
        report=result,
        report_severity=risk_severity(result.risk_level) if result else None,
        app_name=settings.app_name,
    )
    return HTMLResponse(page)
