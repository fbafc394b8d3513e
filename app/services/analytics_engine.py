"""
Analytics engine - derived reports over stored department daily records.
"""
from app.services.record_store import RecordStore
from app.schemas.analytics import (
    NationalDailyReport,
    DepartmentResume,
    DailyTop5,
    DailyTop5PerAgeCategory,
)
from app.utils.aggregators import (
    aggregate_by_day,
    compute_ratio,
    find_extremal_days,
    rank_by_age_category,
)
from app.utils.constants import MIN_RELIABLE_TESTS, TOP_RANKING_SIZE
from typing import List
from datetime import date


class AnalyticsEngine:
    """Compute national, department and daily ranking reports."""
    
    def __init__(self, store: RecordStore):
        self.store = store
    
    def national_reports(self, start_date: date, end_date: date) -> List[NationalDailyReport]:
        """
        Get national totals and positivity ratio per day.
        
        Args:
            start_date: First day, inclusive
            end_date: Last day, inclusive
            
        Returns:
            One report per day with data, ordered by day
        """
        records = self.store.query_records(start_date, end_date)
        daily = aggregate_by_day(records)
        
        reports = []
        for row in daily.itertuples(index=False):
            tests_total = int(row.tests_total)
            tests_positive = int(row.tests_positive)
            reports.append(NationalDailyReport(
                day=row.day,
                tests_total=tests_total,
                tests_positive=tests_positive,
                ratio=compute_ratio(tests_positive, tests_total)
            ))
        
        return reports
    
    def department_resume(self, department: str) -> DepartmentResume:
        """
        Get the days with most tests, most positives and highest ratio.
        
        Only days with more than MIN_RELIABLE_TESTS tests (all age
        categories summed) are considered.
        """
        records = self.store.department_records(department)
        most_tests, most_positives, highest_ratio = find_extremal_days(
            aggregate_by_day(records),
            min_tests=MIN_RELIABLE_TESTS
        )
        
        return DepartmentResume(
            day_with_most_tests=most_tests,
            day_with_most_positives=most_positives,
            day_with_highest_ratio=highest_ratio
        )
    
    def daily_top5(self, day: date) -> DailyTop5:
        """
        Get, per age category, the departments with the highest positivity ratio.
        
        Records with MIN_RELIABLE_TESTS tests or fewer are left out; equal
        ratios keep the store order.
        """
        records = self.store.query_records(day, day)
        rankings = rank_by_age_category(
            records,
            limit=TOP_RANKING_SIZE,
            min_tests=MIN_RELIABLE_TESTS
        )
        
        return DailyTop5(age_categories={
            age_category: DailyTop5PerAgeCategory(top5=ranking)
            for age_category, ranking in rankings.items()
        })
