"""
Routers package initialization.
"""
from app.routers import ingestion
from app.routers import analytics

__all__ = [
    "ingestion",
    "analytics",
]
