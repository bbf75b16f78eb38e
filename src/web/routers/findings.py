"""Findings router: list, filter, review and export."""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel

from src.core.models import FindingStatus
from src.intel.service import filter_findings, finding_filter_options, findings_to_csv
from src.intel.state import IntelState, InvalidTransition
from src.web.dependencies import get_current_username, get_state
from src.web.responses import collection, success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/findings",
    tags=["Findings"],
    dependencies=[Depends(get_current_username)],
)


class StatusUpdateRequest(BaseModel):
    status: Literal["approved", "dismissed"]


@router.get("", summary="List Findings")
async def list_findings(
    competitor: Optional[str] = Query(None, description="Exact competitor name"),
    site_type: Optional[str] = Query(None, description="Exact site type"),
    status: Optional[FindingStatus] = Query(None, description="approved, flagged or dismissed"),
    state: IntelState = Depends(get_state),
):
    """Findings newest first, with the values available for each filter."""
    filtered = filter_findings(
        state.findings,
        competitor=competitor,
        site_type=site_type,
        status=status.value if status else None,
    )
    return collection(
        [f.to_dict() for f in filtered],
        total_unfiltered=len(state.findings),
        filters=finding_filter_options(state.findings),
    )


@router.patch("/{finding_id}/status", summary="Review Finding")
async def update_finding_status(
    finding_id: str,
    request: StatusUpdateRequest,
    state: IntelState = Depends(get_state),
):
    """Approve or dismiss a flagged finding."""
    try:
        finding = state.update_finding_status(finding_id, FindingStatus(request.status))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    if finding is None:
        raise HTTPException(status_code=404, detail="Finding not found")
    return success(f"Finding {finding.status.value}", finding=finding.to_dict())


@router.get("/export", summary="Latest Spreadsheet Export")
async def latest_export(state: IntelState = Depends(get_state)):
    """URL of the spreadsheet attached to the most recent discovery run."""
    if not state.latest_xlsx_url:
        raise HTTPException(status_code=404, detail="No export available yet. Run a discovery first.")
    return {"status": "success", "xlsx_url": state.latest_xlsx_url}


@router.get("/export.csv", summary="Export Findings CSV")
async def export_findings_csv(state: IntelState = Depends(get_state)):
    try:
        content = findings_to_csv(state.findings)
    except Exception:
        logger.exception("Findings CSV export error")
        raise HTTPException(status_code=500, detail="Failed to export findings")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=findings.csv"},
    )
