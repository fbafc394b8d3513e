"""
Services package initialization.
"""
from app.services.record_store import RecordStore
from app.services.datagouv_source import DataGouvSource
from app.services.analytics_engine import AnalyticsEngine
from app.services.ingestion_service import IngestionService

__all__ = [
    "RecordStore",
    "DataGouvSource",
    "AnalyticsEngine",
    "IngestionService",
]
