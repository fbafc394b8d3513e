"""
Schemas package initialization.
"""
from app.schemas.common import (
    ErrorResponse,
    ImportResponse,
    HealthResponse,
)
from app.schemas.records import DepartmentDailyRecord
from app.schemas.analytics import (
    NationalDailyReport,
    DepartmentResume,
    DailyTop5PerAgeCategory,
    DailyTop5,
    DaysLimitResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "ImportResponse",
    "HealthResponse",
    # Records
    "DepartmentDailyRecord",
    # Analytics
    "NationalDailyReport",
    "DepartmentResume",
    "DailyTop5PerAgeCategory",
    "DailyTop5",
    "DaysLimitResponse",
]
