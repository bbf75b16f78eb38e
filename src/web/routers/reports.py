"""Reports router: monthly report generation and history."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel, Field

from src.core.schemas import ReportStatus, StandardResponse
from src.intel.reports import generate_report, month_name
from src.intel.state import IntelState
from src.web.dependencies import get_current_username, get_gateway, get_state
from src.web.responses import accepted, collection

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/reports",
    tags=["Reports"],
    dependencies=[Depends(get_current_username)],
)


async def _generate_in_background(state: IntelState, month: int, year: int, gateway) -> None:
    try:
        await generate_report(state, month, year, gateway)
    finally:
        state.is_generating = False


class GenerateReportRequest(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)


@router.get("", summary="List Reports")
async def list_reports(state: IntelState = Depends(get_state)):
    """Reports, most recent first."""
    return collection([r.to_dict() for r in state.reports])


@router.post("/generate", summary="Generate Monthly Report")
async def trigger_report(
    request: GenerateReportRequest,
    background_tasks: BackgroundTasks,
    state: IntelState = Depends(get_state),
    gateway=Depends(get_gateway),
):
    """Generate a report for the given month from all approved findings."""
    if not state.approved_findings():
        raise HTTPException(status_code=400, detail="Approve at least one finding before generating a report")
    if state.is_generating:
        raise HTTPException(status_code=409, detail="A report is already being generated")

    state.is_generating = True
    background_tasks.add_task(_generate_in_background, state, request.month, request.year, gateway)
    return accepted(f"Generating report for {month_name(request.month)} {request.year}")


@router.get("/status", response_model=StandardResponse[ReportStatus], summary="Report Status")
async def report_status(state: IntelState = Depends(get_state)):
    return StandardResponse(data=ReportStatus(
        is_generating=state.is_generating,
        active_agent_id=state.active_agent_id,
        message=state.report_status,
    ))


@router.get("/{report_id}", response_model=StandardResponse[dict], summary="Get Report")
async def get_report(report_id: str, state: IntelState = Depends(get_state)):
    report = state.get_report(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return StandardResponse(data=report.to_dict())
