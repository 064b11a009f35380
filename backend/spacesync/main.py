"""
SpaceSync API

FastAPI application for office space planning by collaboration compatibility.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spacesync.config import get_settings
from spacesync.models.api import HealthResponse
from spacesync.routes import layout, proximity


# Get settings
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    **SpaceSync API** - Seats people where they work best together.

    ## Features
    - **Proximity**: Compatibility score of every pair of neighbouring desks
    - **Flow**: Declared collaboration between seated people, with distance alerts
    - **Simulate**: What-if desk swaps, without touching the floor plan
    - **Suggestions**: AI-ranked swap proposals

    ## Workflow
    1. Draw rooms and desks → `/api/v1/rooms`, `/api/v1/desks`
    2. Score the floor → `/api/v1/locations/{id}/proximity`
    3. Ask for suggestions → `/api/v1/locations/{id}/suggestions`
    4. Simulate, then apply a swap → `/api/v1/locations/{id}/simulate-swap`, `/apply-swap`
    """,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(layout.router, prefix=settings.api_prefix)
app.include_router(proximity.router, prefix=settings.api_prefix)


# ============ Health Check ============

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """Root endpoint - health check."""
    return HealthResponse(
        status="ok",
        version=settings.app_version,
        message="SpaceSync API is running. Visit /docs for API documentation."
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.app_version
    )


# ============ Run with Uvicorn ============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "spacesync.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
