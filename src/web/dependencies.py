"""Shared dependencies for the intel hub API routers."""

import secrets
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.core.ai_client import agent_client
from src.core.config import settings
from src.intel.state import IntelState

logger = logging.getLogger(__name__)

security = HTTPBasic()


# --- State ---

def get_state(request: Request) -> IntelState:
    """The application's IntelState (created in the app lifespan)."""
    state = getattr(request.app.state, "intel", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Intel state not initialised")
    return state


def get_gateway():
    """Agent gateway used by the workflows."""
    return agent_client


# --- Auth ---

def get_current_username(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """Authenticate user via HTTP Basic Auth."""
    is_correct_username = secrets.compare_digest(
        credentials.username.encode("utf8"), settings.dashboard_username.encode("utf8")
    )
    is_correct_password = secrets.compare_digest(
        credentials.password.encode("utf8"), settings.dashboard_password.encode("utf8")
    )

    if not (is_correct_username and is_correct_password):
        logger.warning(f"Rejected login for {credentials.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
