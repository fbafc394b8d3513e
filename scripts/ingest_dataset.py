"""
Database ingestion script.

Loads the data.gouv.fr testing CSV into the database, either from the
configured DATAGOUV_URL or from a local file. Each batch is committed on
its own so a long import shows progress; rerunning is safe (upsert).
"""
import os
import sys
import argparse
import logging
from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import Settings, configure_logging, ensure_directories
from app.database import create_db_engine, create_session_factory, init_db
from app.exceptions import CovidAnalyticsError
from app.services.datagouv_source import DataGouvSource, parse_csv_text
from app.services.record_store import RecordStore
from app.utils.date_utils import format_day

logger = logging.getLogger(__name__)


def load_records(settings: Settings, csv_file: str = None):
    """Read records from a local CSV file or the configured URL."""
    if csv_file:
        logger.info(f"Reading {csv_file}")
        with open(csv_file, 'r', encoding='utf-8') as f:
            return parse_csv_text(f.read())
    
    source = DataGouvSource(settings.DATAGOUV_URL, timeout=settings.SOURCE_TIMEOUT_SECONDS)
    return source.fetch()


def save_records(store: RecordStore, records, batch_size: int) -> int:
    """Upsert records batch by batch with a progress bar."""
    saved = 0
    for start in tqdm(range(0, len(records), batch_size), desc="    Batches"):
        saved += store.upsert(records[start:start + batch_size])
    return saved


def main():
    """Main ingestion function."""
    parser = argparse.ArgumentParser(description="Import COVID-19 testing data")
    parser.add_argument(
        "--file",
        help="Local CSV file to import instead of DATAGOUV_URL",
    )
    args = parser.parse_args()
    
    settings = Settings()
    configure_logging(settings)
    
    print("=" * 60)
    print("🚀 COVID Testing Analytics - Data Import")
    print("=" * 60)
    
    print("\n📊 Initializing database...")
    ensure_directories(settings)
    engine = create_db_engine(settings)
    init_db(engine)
    print(f"  ✅ Database ready at: {settings.database_url}")
    
    db = create_session_factory(engine)()
    
    try:
        print("\n📥 Loading data...")
        records = load_records(settings, args.file)
        
        store = RecordStore(db, batch_size=settings.UPSERT_BATCH_SIZE)
        saved = save_records(store, records, settings.UPSERT_BATCH_SIZE)
        
        first_day, last_day = store.date_range()
        
        print("\n" + "=" * 60)
        print("✅ Import complete!")
        print("-" * 40)
        print(f"  📊 Records saved: {saved:,}")
        print(f"  📊 Departments: {len(store.list_departments()):,}")
        if first_day and last_day:
            print(f"  📊 Days: {format_day(first_day)} to {format_day(last_day)}")
        print("=" * 60)
        
    except CovidAnalyticsError as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
