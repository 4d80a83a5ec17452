"""FastAPI routers that expose HTTP endpoints."""

from fastapi import APIRouter

from . import progression

api_router = APIRouter()
api_router.include_router(progression.router)

__all__ = ["api_router", "progression"]
