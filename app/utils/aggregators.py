"""
Data aggregation and ranking utility functions.
"""
import pandas as pd
from typing import Any, Dict, Iterable, List, Optional, Tuple
from datetime import date
from app.utils.constants import MIN_RELIABLE_TESTS, TOP_RANKING_SIZE

RECORD_COLUMNS = [
    'department', 'day', 'age_category', 'tests_total', 'tests_positive', 'population'
]
VALUE_COLUMNS = ['tests_total', 'tests_positive']


def compute_ratio(tests_positive: int, tests_total: int) -> float:
    """
    Positivity ratio of a grouping.

    Returns 0.0 when there are no tests instead of dividing by zero.
    """
    if tests_total > 0:
        return tests_positive / tests_total
    return 0.0


def records_to_frame(records: Iterable[Any]) -> pd.DataFrame:
    """Build a DataFrame with one row per record."""
    return pd.DataFrame(
        [{column: getattr(r, column) for column in RECORD_COLUMNS} for r in records],
        columns=RECORD_COLUMNS
    )


def aggregate_by_day(records: Iterable[Any]) -> pd.DataFrame:
    """
    Sum test counts per day across departments and age categories.

    Args:
        records: Records exposing day, tests_total and tests_positive

    Returns:
        DataFrame with day, tests_total and tests_positive columns,
        sorted by day ascending whatever the input order
    """
    df = records_to_frame(records)

    if df.empty:
        return pd.DataFrame(columns=['day'] + VALUE_COLUMNS)

    agg_df = df.groupby('day', sort=True)[VALUE_COLUMNS].sum().reset_index()
    return agg_df.sort_values('day', kind='stable').reset_index(drop=True)


def find_extremal_days(
    daily: pd.DataFrame,
    min_tests: int = MIN_RELIABLE_TESTS
) -> Tuple[Optional[date], Optional[date], Optional[date]]:
    """
    Find the days with the most tests, most positives and highest ratio.

    Days with min_tests tests or fewer are skipped. Each maximum starts at 0
    and only moves on a strictly greater value, so the earliest day wins ties
    and a maximum never exceeded stays None.

    Args:
        daily: Output of aggregate_by_day
        min_tests: Reliability threshold on the daily test count

    Returns:
        Tuple of (day_with_most_tests, day_with_most_positives, day_with_highest_ratio)
    """
    most_tests_day = None
    most_positives_day = None
    highest_ratio_day = None
    max_tests = 0
    max_positives = 0
    max_ratio = 0.0

    for row in daily.itertuples(index=False):
        tests_total = int(row.tests_total)
        tests_positive = int(row.tests_positive)

        if tests_total <= min_tests:
            continue

        ratio = compute_ratio(tests_positive, tests_total)

        if tests_total > max_tests:
            most_tests_day = row.day
            max_tests = tests_total

        if tests_positive > max_positives:
            most_positives_day = row.day
            max_positives = tests_positive

        if ratio > max_ratio:
            highest_ratio_day = row.day
            max_ratio = ratio

    return most_tests_day, most_positives_day, highest_ratio_day


def insert_ranked(
    ranking: List[Tuple[float, Any]],
    ratio: float,
    item: Any,
    limit: int = TOP_RANKING_SIZE
) -> None:
    """
    Insert an item into a ranking sorted by ratio descending, in place.

    The item goes before the first entry with a strictly lower ratio, so
    equal ratios keep their arrival order. The ranking is then cut to limit.
    """
    for index, (ranked_ratio, _) in enumerate(ranking):
        if ranked_ratio < ratio:
            ranking.insert(index, (ratio, item))
            break
    else:
        ranking.append((ratio, item))

    del ranking[limit:]


def rank_by_age_category(
    records: Iterable[Any],
    limit: int = TOP_RANKING_SIZE,
    min_tests: int = MIN_RELIABLE_TESTS
) -> Dict[int, List[Any]]:
    """
    Keep the highest positivity records of each age category.

    Args:
        records: Records in arrival order
        limit: Maximum entries per age category
        min_tests: Records with this many tests or fewer are ignored

    Returns:
        Mapping of age category to its records, best ratio first
    """
    rankings: Dict[int, List[Tuple[float, Any]]] = {}

    for record in records:
        if record.tests_total <= min_tests:
            continue
        ratio = compute_ratio(record.tests_positive, record.tests_total)
        insert_ranked(rankings.setdefault(record.age_category, []), ratio, record, limit)

    return {
        age_category: [item for _, item in ranking]
        for age_category, ranking in rankings.items()
    }
