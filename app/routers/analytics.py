"""
Analytics API endpoints.
"""
from fastapi import APIRouter, Depends, Request
from app.routers.dependencies import get_analytics_engine, get_record_store
from app.schemas.analytics import (
    DailyTop5,
    DaysLimitResponse,
    DepartmentResume,
    NationalDailyReport,
)
from app.schemas.common import ErrorResponse
from app.schemas.records import DepartmentDailyRecord
from app.services.analytics_engine import AnalyticsEngine
from app.services.record_store import RecordStore
from app.utils.query_params import required_day, required_list, required_param
from typing import List

router = APIRouter(responses={
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})


@router.get("/departments", response_model=List[str])
def list_departments(store: RecordStore = Depends(get_record_store)):
    """Get list of all department codes in the dataset."""
    return store.list_departments()


@router.get("/age_categories", response_model=List[int])
def list_age_categories(store: RecordStore = Depends(get_record_store)):
    """Get list of all age categories in the dataset."""
    return store.list_age_categories()


@router.get("/days", response_model=DaysLimitResponse)
def get_days_limit(store: RecordStore = Depends(get_record_store)):
    """First and last day with data; both null when nothing was imported."""
    first_day, last_day = store.date_range()
    return DaysLimitResponse(from_=first_day, to=last_day)


@router.get("/data", response_model=List[DepartmentDailyRecord])
def get_data(request: Request, store: RecordStore = Depends(get_record_store)):
    """
    Get raw records.
    
    - **from**: First day (YYYY-MM-DD), inclusive
    - **to**: Last day (YYYY-MM-DD), inclusive
    - **departments**: Department code, repeat for several
    """
    start_date = required_day(request, "from")
    end_date = required_day(request, "to")
    departments = required_list(request, "departments")
    
    return store.query_records(start_date, end_date, departments)


@router.get("/national", response_model=List[NationalDailyReport])
def get_national_reports(
    request: Request,
    engine: AnalyticsEngine = Depends(get_analytics_engine)
):
    """
    Get national test totals and positivity ratio per day.
    
    - **from**: First day (YYYY-MM-DD), inclusive
    - **to**: Last day (YYYY-MM-DD), inclusive
    """
    start_date = required_day(request, "from")
    end_date = required_day(request, "to")
    
    return engine.national_reports(start_date, end_date)


@router.get("/department", response_model=DepartmentResume)
def get_department_resume(
    request: Request,
    engine: AnalyticsEngine = Depends(get_analytics_engine)
):
    """
    Get the days with most tests, most positives and highest ratio.
    
    - **department**: Department code
    """
    department = required_param(request, "department")
    
    return engine.department_resume(department)


@router.get("/daily_top5", response_model=DailyTop5)
def get_daily_top5(
    request: Request,
    engine: AnalyticsEngine = Depends(get_analytics_engine)
):
    """
    Get the five departments with the highest positivity ratio per age category.
    
    - **day**: Day (YYYY-MM-DD)
    """
    day = required_day(request, "day")
    
    return engine.daily_top5(day)
