"""ReadTrace API - Main application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from readtrace.api import api_router
from readtrace.api.health import router as health_router
from readtrace import __version__
from readtrace.config import settings
from readtrace.logging_config import setup_logging

# Initialize logging
setup_logging()


app = FastAPI(
    title="ReadTrace",
    description="Manga reading progress tracker - Import, sync, resume",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
# In production, set CORS_ORIGINS to your domain(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")

# Include health routes (not under /api prefix)
app.include_router(health_router)


@app.get("/")
def root():
    """Root endpoint - API info."""
    return {
        "name": "ReadTrace",
        "version": __version__,
        "docs": "/docs",
    }
