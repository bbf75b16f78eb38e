"""Discovery router: trigger runs, poll status, history."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from src.core.schemas import DiscoveryStatus, StandardResponse
from src.intel.discovery import run_discovery
from src.intel.state import IntelState
from src.web.dependencies import get_current_username, get_gateway, get_state
from src.web.responses import accepted, collection

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/discovery",
    tags=["Discovery"],
    dependencies=[Depends(get_current_username)],
)


async def _discover_in_background(state: IntelState, gateway) -> None:
    """Run discovery, releasing the busy flag the trigger endpoint claimed."""
    try:
        await run_discovery(state, gateway)
    finally:
        state.is_discovering = False


@router.post("/run", summary="Run Discovery")
async def trigger_discovery(
    background_tasks: BackgroundTasks,
    state: IntelState = Depends(get_state),
    gateway=Depends(get_gateway),
):
    """Start a discovery run over all tracked competitors."""
    if not state.competitors:
        raise HTTPException(status_code=400, detail="Add competitors before running discovery")
    if state.is_discovering:
        raise HTTPException(status_code=409, detail="A discovery run is already in progress")

    # Claimed here so a second request is refused before the task starts
    state.is_discovering = True
    background_tasks.add_task(_discover_in_background, state, gateway)
    return accepted(f"Discovery started for {len(state.competitors)} competitors")


@router.get("/status", response_model=StandardResponse[DiscoveryStatus], summary="Discovery Status")
async def discovery_status(state: IntelState = Depends(get_state)):
    return StandardResponse(data=DiscoveryStatus(
        is_discovering=state.is_discovering,
        active_agent_id=state.active_agent_id,
        message=state.discovery_status,
    ))


@router.get("/history", summary="Discovery History")
async def discovery_history(state: IntelState = Depends(get_state)):
    return collection([run.to_dict() for run in state.discovery_history])
