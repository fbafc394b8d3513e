"""
Record store - persistence and queries for department daily reports.
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects import postgresql, sqlite
from app.exceptions import StorageError
from app.models.department_daily_report import DepartmentDailyReport
from app.schemas.records import DepartmentDailyRecord
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from datetime import date
import logging

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = ['tests_total', 'tests_positive', 'population']

_UPSERT_INSERTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


class RecordStore:
    """Read and write access to the department_daily_report table."""

    def __init__(self, db: Session, batch_size: int = 1000):
        self.db = db
        self.batch_size = batch_size

    def upsert(self, records: Iterable[DepartmentDailyRecord]) -> int:
        """
        Insert or update records keyed by (department, day, age_category).

        Later records win over earlier ones sharing a key. The call is a
        single transaction: the first failing batch rolls everything back.

        Args:
            records: Records to store

        Returns:
            Number of distinct keys written

        Raises:
            StorageError: on any database failure
        """
        rows: Dict[tuple, dict] = {}
        for record in records:
            rows[record.key] = record.model_dump()

        if not rows:
            return 0

        values = list(rows.values())
        try:
            for start in range(0, len(values), self.batch_size):
                self._write_batch(values[start:start + self.batch_size])
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            # sqlite3 raises OverflowError itself for integers it cannot bind
            self.db.rollback()
            logger.error(f"Upsert of {len(values)} records failed: {e}")
            raise StorageError(f"cannot save reports: {e}") from e

        return len(values)

    def _write_batch(self, batch: List[dict]):
        """Write one batch with the dialect's native upsert when available."""
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)

        if insert is None:
            for row in batch:
                self.db.merge(DepartmentDailyReport(**row))
            self.db.flush()
            return

        stmt = insert(DepartmentDailyReport.__table__)
        stmt = stmt.on_conflict_do_update(
            index_elements=['department', 'day', 'age_category'],
            set_={column: stmt.excluded[column] for column in UPDATABLE_COLUMNS}
        )
        # executemany: six bound parameters per row whatever the batch size
        self.db.connection().execute(stmt, batch)

    def list_departments(self) -> List[str]:
        """Get list of all departments in the data."""
        try:
            departments = self.db.query(
                func.distinct(DepartmentDailyReport.department)
            ).order_by(DepartmentDailyReport.department).all()
        except SQLAlchemyError as e:
            raise StorageError(f"cannot retrieve departments: {e}") from e
        return [d[0] for d in departments]

    def list_age_categories(self) -> List[int]:
        """Get list of all age categories in the data."""
        try:
            categories = self.db.query(
                func.distinct(DepartmentDailyReport.age_category)
            ).order_by(DepartmentDailyReport.age_category).all()
        except SQLAlchemyError as e:
            raise StorageError(f"cannot retrieve age categories: {e}") from e
        return [c[0] for c in categories]

    def date_range(self) -> Tuple[Optional[date], Optional[date]]:
        """First and last day in the store, (None, None) when empty."""
        try:
            first_day, last_day = self.db.query(
                func.min(DepartmentDailyReport.day),
                func.max(DepartmentDailyReport.day)
            ).one()
        except SQLAlchemyError as e:
            raise StorageError(f"cannot retrieve days limit: {e}") from e
        return first_day, last_day

    def query_records(
        self,
        start_date: date,
        end_date: date,
        departments: Optional[Sequence[str]] = None
    ) -> List[DepartmentDailyRecord]:
        """
        Get records between two days, inclusive.

        Args:
            start_date: First day
            end_date: Last day
            departments: Department allow-list, empty or None for all

        Returns:
            Records ordered by day, department and age category
        """
        query = self.db.query(DepartmentDailyReport).filter(
            DepartmentDailyReport.day >= start_date,
            DepartmentDailyReport.day <= end_date
        )

        if departments:
            query = query.filter(DepartmentDailyReport.department.in_(list(departments)))

        return self._fetch(query, "cannot query reports")

    def department_records(self, department: str) -> List[DepartmentDailyRecord]:
        """Get every record of one department."""
        query = self.db.query(DepartmentDailyReport).filter(
            DepartmentDailyReport.department == department
        )
        return self._fetch(query, "cannot query department reports")

    def _fetch(self, query, error_message: str) -> List[DepartmentDailyRecord]:
        query = query.order_by(
            DepartmentDailyReport.day,
            DepartmentDailyReport.department,
            DepartmentDailyReport.age_category
        )
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            raise StorageError(f"{error_message}: {e}") from e
        return [DepartmentDailyRecord.model_validate(row) for row in rows]
