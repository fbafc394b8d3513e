"""
Shared FastAPI dependencies for the routers.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.services.analytics_engine import AnalyticsEngine
from app.services.record_store import RecordStore


def get_record_store(request: Request, db: Session = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's session."""
    return RecordStore(db, batch_size=request.app.state.settings.UPSERT_BATCH_SIZE)


def get_analytics_engine(store: RecordStore = Depends(get_record_store)) -> AnalyticsEngine:
    """Analytics engine reading from the request's record store."""
    return AnalyticsEngine(store)


def get_source(request: Request):
    """CSV source configured at startup."""
    return request.app.state.source
