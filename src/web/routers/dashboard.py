"""Dashboard router: stats, agents and sample data toggle."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.core.schemas import StandardResponse
from src.intel.service import dashboard_summary
from src.intel.state import IntelState
from src.web.dependencies import get_current_username, get_state
from src.web.responses import success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_username)],
)


class SampleDataRequest(BaseModel):
    enabled: bool


@router.get("/stats", response_model=StandardResponse[dict], summary="Dashboard Stats")
async def get_dashboard_stats(state: IntelState = Depends(get_state)):
    """Get summary statistics for the dashboard."""
    try:
        return StandardResponse(data=dashboard_summary(state))
    except Exception:
        logger.exception("Dashboard stats error")
        raise HTTPException(status_code=500, detail="Failed to load dashboard stats")


@router.post("/sample-data", summary="Toggle Sample Data")
async def toggle_sample_data(request: SampleDataRequest, state: IntelState = Depends(get_state)):
    """Show demo data (not persisted) or return to stored data."""
    await state.set_sample_mode(request.enabled)
    logger.info(f"Sample mode {'enabled' if request.enabled else 'disabled'}")
    return success(
        f"Sample data {'enabled' if request.enabled else 'disabled'}",
        sample_mode=state.sample_mode,
    )
