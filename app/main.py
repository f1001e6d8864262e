# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config

# --- Application-specific Router Imports ---
from .routers import (
    assessments_router,
    classes_router,
    dashboard_router,
    students_router,
)

# --- Service Imports for Startup Logic ---
from .db import database
from .services.database_service import DatabaseService
from .services.roster_cache import RosterCache

logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)-5s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at start-up: make sure the tables exist, then fill the roster
    # from both collections and keep it subscribed for the app's lifetime.
    database.init_db()
    roster = RosterCache()
    session = database.SessionLocal()
    try:
        roster.attach(DatabaseService(db_session=session))
    finally:
        session.close()
    app.state.roster = roster
    logger.info("Roster loaded: %d classes, %d students", len(roster.classes), len(roster.students))
    yield
    # Runs once at shutdown.
    roster.detach()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="SkillMap Backend API",
    description="Classes, students and reading/writing assessment tracking for teachers.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(assessments_router.router, prefix="/api/assessments", tags=["Assessments"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "SkillMap Backend is running!", "version": app.version}
