"""
Analytics Pydantic schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from datetime import date
from app.schemas.records import DepartmentDailyRecord


class NationalDailyReport(BaseModel):
    """Tests summed over every department and age category for one day."""
    day: date
    tests_total: int
    tests_positive: int
    ratio: float = Field(..., description="tests_positive / tests_total, 0 when there are no tests")


class DepartmentResume(BaseModel):
    """Extremal days of a department; unset when no reliable day qualifies."""
    day_with_most_tests: Optional[date] = None
    day_with_most_positives: Optional[date] = None
    day_with_highest_ratio: Optional[date] = None


class DailyTop5PerAgeCategory(BaseModel):
    """Highest positivity records of one age category, best first."""
    top5: List[DepartmentDailyRecord] = Field(default_factory=list)


class DailyTop5(BaseModel):
    """Daily leaderboard keyed by age category."""
    age_categories: Dict[int, DailyTop5PerAgeCategory] = Field(default_factory=dict)


class DaysLimitResponse(BaseModel):
    """First and last day present in the store."""
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    
    class Config:
        populate_by_name = True
