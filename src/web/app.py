from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import contextlib
import logging

from src.core.config import settings
from src.core.database import init_db
from src.intel.state import IntelState
from src.intel.storage import KeyValueStore

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Competitor Intel Hub",
    description="API for competitor tracking, AI content discovery and monthly intelligence reports",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Dashboard", "description": "Pipeline statistics, agents and sample data"},
        {"name": "Competitors", "description": "Tracked competitor list"},
        {"name": "Findings", "description": "Discovered content and review"},
        {"name": "Discovery", "description": "Discovery runs and history"},
        {"name": "Reports", "description": "Monthly report generation"},
    ]
)

from src.web.routers import register_routers

register_routers(app)

@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize storage and load persisted collections
    await init_db()
    state = IntelState(store=KeyValueStore())
    await state.load()
    app.state.intel = state

    yield

    # Let pending write-throughs land
    await state.flush()

app.router.lifespan_context = lifespan

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"], # Vite Dev Server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok", "environment": settings.environment}
