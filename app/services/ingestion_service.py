"""
Ingestion service - load the published CSV into the record store.
"""
from app.services.record_store import RecordStore
import logging

logger = logging.getLogger(__name__)


class IngestionService:
    """Fetch every row from a source and upsert it."""
    
    def __init__(self, source, store: RecordStore):
        self.source = source
        self.store = store
    
    def run(self) -> int:
        """
        Run one ingestion.
        
        Transport and format errors from the source and storage errors
        propagate; rows the source could not parse are already dropped.
        
        Returns:
            Number of records written
        """
        records = self.source.fetch()
        logger.info(f"Fetched {len(records):,} records, saving")
        
        saved = self.store.upsert(records)
        logger.info(f"✅ Saved {saved:,} records")
        return saved
