"""API routes."""
from fastapi import APIRouter
from readtrace.api import auth, series, progress, imports, preferences, profile

api_router = APIRouter()

# Auth
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Library
api_router.include_router(series.router, tags=["series"])
api_router.include_router(progress.router, tags=["progress"])
api_router.include_router(imports.router, tags=["import"])

# Account
api_router.include_router(preferences.router, tags=["preferences"])
api_router.include_router(profile.router, tags=["profile"])
