"""Breachsim API - Attack Path & Campaign Simulation Service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from breachsim.config import get_settings
from breachsim.data.ttp_library import get_ttp_registry
from breachsim.routers import campaigns, health, simulation

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.api_log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Breachsim API...")
    # Fail fast on a broken catalogue
    registry = get_ttp_registry()
    logger.info(f"TTP library ready with {len(registry)} techniques")
    yield
    logger.info("Shutting down Breachsim API...")


app = FastAPI(
    title="Breachsim",
    description="Attack Path & Campaign Simulation Service",
    version=health.VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(simulation.router, prefix="/api/simulation", tags=["Simulation"])
app.include_router(campaigns.router, prefix="/api/campaigns", tags=["Campaigns"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Breachsim",
        "version": health.VERSION,
        "description": "Attack Path & Campaign Simulation Service",
    }


def run() -> None:
    """Serve the API with uvicorn using the configured bind address."""
    import uvicorn

    uvicorn.run(
        "breachsim.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.api_log_level.lower(),
    )


if __name__ == "__main__":
    run()
