"""API routes module for the reference lookup service.

This module exports all API routers for registration in main.py.
"""

from src.api.routes.health import router as health_router
from src.api.routes.references import router as references_router


__all__ = [
    "health_router",
    "references_router",
]
