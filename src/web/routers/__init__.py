from fastapi import FastAPI

from src.web.routers.dashboard import router as dashboard_router
from src.web.routers.competitors import router as competitors_router
from src.web.routers.findings import router as findings_router
from src.web.routers.discovery import router as discovery_router
from src.web.routers.reports import router as reports_router

def register_routers(app: FastAPI):
    """Register all routers with the application."""
    app.include_router(dashboard_router)
    app.include_router(competitors_router)
    app.include_router(findings_router)
    app.include_router(discovery_router)
    app.include_router(reports_router)
