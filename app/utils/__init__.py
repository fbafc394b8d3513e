"""
Utils package initialization.
"""
from app.utils.date_utils import (
    parse_iso_day,
    format_day,
)
from app.utils.aggregators import (
    compute_ratio,
    aggregate_by_day,
    find_extremal_days,
    insert_ranked,
    rank_by_age_category,
)
from app.utils.constants import (
    EXPECTED_CSV_HEADERS,
    MIN_RELIABLE_TESTS,
    TOP_RANKING_SIZE,
)

__all__ = [
    "parse_iso_day",
    "format_day",
    "compute_ratio",
    "aggregate_by_day",
    "find_extremal_days",
    "insert_ranked",
    "rank_by_age_category",
    "EXPECTED_CSV_HEADERS",
    "MIN_RELIABLE_TESTS",
    "TOP_RANKING_SIZE",
]
