from typing import Generic, TypeVar, Optional
from pydantic import BaseModel

T = TypeVar("T")

class StandardResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""
    status: str = "success"
    data: Optional[T] = None
    message: Optional[str] = None

class DiscoveryStatus(BaseModel):
    """Progress of the current (or last) discovery run."""
    is_discovering: bool = False
    active_agent_id: Optional[str] = None
    message: str = ""

class ReportStatus(BaseModel):
    is_generating: bool = False
    active_agent_id: Optional[str] = None
    message: str = ""
