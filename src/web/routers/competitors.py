"""Competitors router: tracked competitor list."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.intel.state import IntelState
from src.web.dependencies import get_current_username, get_state
from src.web.responses import collection, success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/competitors",
    tags=["Competitors"],
    dependencies=[Depends(get_current_username)],
)


# --- Schemas ---

class CompetitorRequest(BaseModel):
    name: str


# --- Endpoints ---

@router.get("", summary="List Competitors")
async def list_competitors(state: IntelState = Depends(get_state)):
    return collection([c.to_dict() for c in state.competitors])


@router.post("", summary="Add Competitor")
async def add_competitor(request: CompetitorRequest, state: IntelState = Depends(get_state)):
    try:
        competitor = state.add_competitor(request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Added competitor {competitor.name}")
    return success("Competitor added", competitor=competitor.to_dict())


@router.put("/{competitor_id}", summary="Rename Competitor")
async def rename_competitor(competitor_id: str, request: CompetitorRequest, state: IntelState = Depends(get_state)):
    try:
        competitor = state.edit_competitor(competitor_id, request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if competitor is None:
        raise HTTPException(status_code=404, detail="Competitor not found")
    return success("Competitor renamed", competitor=competitor.to_dict())


@router.delete("/{competitor_id}", summary="Delete Competitor")
async def delete_competitor(competitor_id: str, state: IntelState = Depends(get_state)):
    """Remove a competitor. Existing findings are kept."""
    if not state.delete_competitor(competitor_id):
        raise HTTPException(status_code=404, detail="Competitor not found")
    return success("Competitor deleted")
