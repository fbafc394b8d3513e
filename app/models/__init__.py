"""
Models package initialization.
"""
from app.models.department_daily_report import DepartmentDailyReport

__all__ = ["DepartmentDailyReport"]
