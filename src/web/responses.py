"""Response conventions for the intel hub API.

CONVENTIONS
-----------

1. GET single resource:
   Return: {"status": "success", "data": {...}}

2. GET collection:
   Return: {"status": "success", "data": [...], "total": int}

3. POST/PUT/PATCH mutation:
   Return: {"status": "success", "message": "...", "<resource>": {...}}

4. DELETE:
   Return: {"status": "success", "message": "..."}

5. Background task trigger (discovery, report generation):
   Return: {"status": "accepted", "message": "..."}

ERRORS
------
All errors use standard FastAPI HTTPException, which returns:
   {"detail": "Human-readable error message"}

STATUS CODES
------------
- 200: Success
- 400: Bad request / precondition not met (e.g. no competitors)
- 401: Missing or wrong credentials
- 404: Resource not found
- 409: Conflict (invalid review transition, workflow already running)
- 500: Internal server error
"""

from typing import Any, Dict, List


def collection(data: List[Dict], **extra) -> Dict[str, Any]:
    """Wrap an unpaginated list result."""
    return {
        "status": "success",
        "data": data,
        "total": len(data),
        **extra,
    }


def success(message: str = "OK", **extra) -> Dict[str, Any]:
    """Standard mutation response."""
    return {"status": "success", "message": message, **extra}


def accepted(message: str) -> Dict[str, Any]:
    """Standard background task response."""
    return {"status": "accepted", "message": message}
