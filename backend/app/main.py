"""
Smart Task Manager API - projects, tasks, assignments and a per-user dashboard.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.database import init_db
from app.routes import dashboard, projects, tasks, users
from app.exceptions import AUTHENTICATED_RESPONSES, register_exception_handlers
from app.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.app_name}...")
    await init_db()
    logger.info("Database initialized")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Task management API with projects, assignments and dashboard statistics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(projects.router, prefix="/projects", tags=["Projects"], responses=AUTHENTICATED_RESPONSES)
app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"], responses=AUTHENTICATED_RESPONSES)
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"], responses=AUTHENTICATED_RESPONSES)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "OK", "message": f"{settings.app_name} is running"}
