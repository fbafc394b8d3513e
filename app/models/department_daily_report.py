"""
Department daily report SQLAlchemy model.
Stores COVID-19 test counts by department, day and age category.
"""
from sqlalchemy import Column, Integer, String, Date, BigInteger, Index
from app.database import Base


class DepartmentDailyReport(Base):
    """
    Department daily report table model.
    
    One row per (department, day, age category), the natural key of the
    source dataset, which is also the primary key so re-ingestion upserts.
    Based on CSV columns: dep, jour, P, T, cl_age90, pop
    """
    __tablename__ = "department_daily_report"
    
    # Natural key
    department = Column(String(10), primary_key=True)
    day = Column(Date, primary_key=True, index=True)
    age_category = Column(Integer, primary_key=True)
    
    # Counts (T, P and pop in CSV)
    tests_total = Column(BigInteger, default=0, nullable=False)
    tests_positive = Column(BigInteger, default=0, nullable=False)
    population = Column(BigInteger, default=0, nullable=False)
    
    # Composite indexes for common queries
    __table_args__ = (
        Index('idx_report_day_age', 'day', 'age_category'),
        Index('idx_report_department_day', 'department', 'day'),
    )
    
    def __repr__(self):
        return (
            f"<DepartmentDailyReport(department={self.department}, day={self.day}, "
            f"age_category={self.age_category}, tests_total={self.tests_total})>"
        )
