"""
FastAPI Backend dla edytora plansz.

Endpoints:
    GET  /api/boards               - lista przykładowych plansz
    GET  /api/boards/{name}        - plansza z boards.yaml + podgląd ASCII
    POST /api/boards/validate      - raport walidacji planszy
    POST /api/boards/assign-ids    - numerowanie pól ścieżki
    POST /api/boards/path          - najkrótsza ścieżka A*
    POST /api/boards/reachable     - pola osiągalne w N krokach

    GET  /api/health               - health check
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import sys
from pathlib import Path

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.routers import boards


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 Tycoon Board API starting...")
    print(f"📁 Board data from: {boards.DATA_PATH}")
    yield
    print("👋 Tycoon Board API shutting down...")


app = FastAPI(
    title="Tycoon Board API",
    description="Board topology engine: validation, numbering, pathfinding",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (editor runs from file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(boards.router, prefix="/api", tags=["Boards"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
