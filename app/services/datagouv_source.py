"""
data.gouv.fr source - fetch and parse the daily department testing CSV.

Columns of the "sp-pos-quot-dep" file:
    dep       department code (01, 2A, 971, ...)
    jour      day, YYYY-MM-DD
    P         number of positive tests
    T         number of tests performed
    cl_age90  age class
    pop       population of the age class
"""
import io
import logging
import math
import re
from typing import List, Optional

import pandas as pd
import requests

from app.exceptions import FormatError, RowParseError, TransportError
from app.schemas.records import DepartmentDailyRecord
from app.utils.constants import CSV_DELIMITER, EXPECTED_CSV_HEADERS
from app.utils.date_utils import parse_iso_day

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Bounds of the Integer (age_category) and BigInteger columns
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class DataGouvSource:
    """CSV source published on data.gouv.fr."""

    def __init__(self, url: str, timeout: float = 60.0):
        self.url = url
        self.timeout = timeout

    def fetch(self) -> List[DepartmentDailyRecord]:
        """
        Download and parse the CSV.

        Returns:
            Every row that could be parsed; bad rows are logged and skipped

        Raises:
            TransportError: if the file cannot be downloaded
            FormatError: if the header is not the supported one
        """
        if not self.url:
            raise TransportError("unable to retrieve csv file from url: no source url configured")

        logger.info(f"Fetching testing data from {self.url}")
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"unable to retrieve csv file from url: {e}") from e

        logger.info(f"Downloaded {len(response.content):,} bytes")
        try:
            text = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"csv file is not utf-8: {e}") from e
        return parse_csv_text(text)


def parse_csv_text(text: str) -> List[DepartmentDailyRecord]:
    """
    Parse the semicolon-delimited CSV body.

    Args:
        text: Whole file content, header included

    Returns:
        Parsed records in file order

    Raises:
        FormatError: if the header does not match EXPECTED_CSV_HEADERS
    """
    if not text.strip():
        return []

    def skip_bad_line(fields: List[str]) -> None:
        logger.warning(f"unable to parse csv row: expected {len(EXPECTED_CSV_HEADERS)} fields, got {fields}")
        return None

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=CSV_DELIMITER,
            dtype=str,
            keep_default_na=False,
            index_col=False,
            engine="python",
            on_bad_lines=skip_bad_line,
        )
    except (pd.errors.ParserError, ValueError) as e:
        raise FormatError(f"unable to parse csv file: {e}") from e

    if list(df.columns) != EXPECTED_CSV_HEADERS:
        raise FormatError("invalid csv headers - this csv format is not supported")

    records = []
    skipped = 0
    for row in df.itertuples(index=False, name=None):
        try:
            records.append(parse_csv_row(row))
        except RowParseError as e:
            skipped += 1
            logger.warning(f"unable to parse csv row {list(row)}: {e}")

    logger.info(f"Parsed {len(records):,} rows, skipped {skipped:,}")
    return records


def parse_csv_row(row) -> DepartmentDailyRecord:
    """
    Parse one data row ordered as dep, jour, P, T, cl_age90, pop.

    Raises:
        RowParseError: on any invalid field
    """
    department, day_str, positives_str, total_str, age_str, population_str = row

    if not isinstance(department, str) or not department:
        raise RowParseError(f"invalid department ({department})")

    try:
        day = parse_iso_day(day_str)
    except ValueError as e:
        raise RowParseError(f"invalid day ({day_str})") from e

    return DepartmentDailyRecord(
        department=department,
        day=day,
        age_category=_parse_int(age_str, "age category", INT32_MIN, INT32_MAX),
        tests_total=_parse_int(total_str, "total tests"),
        tests_positive=_parse_int(positives_str, "positive tests"),
        population=_parse_population(population_str),
    )


def _parse_int(value: Optional[str], field: str, low: int = INT64_MIN, high: int = INT64_MAX) -> int:
    if not isinstance(value, str) or not INTEGER_PATTERN.fullmatch(value):
        raise RowParseError(f"invalid {field} ({value})")
    return _check_range(int(value), value, field, low, high)


def _parse_population(value: Optional[str]) -> int:
    """Integer population, with float values rounded half away from zero."""
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value):
        return _check_range(int(value), value, "population")

    # Some overseas departments (978) publish fractional populations
    if not isinstance(value, str) or not FLOAT_PATTERN.fullmatch(value):
        raise RowParseError(f"invalid population ({value})")

    population = float(value)
    if not math.isfinite(population):
        raise RowParseError(f"invalid population ({value})")

    rounded = int(math.copysign(math.floor(abs(population) + 0.5), population))
    return _check_range(rounded, value, "population")


def _check_range(number: int, value: str, field: str, low: int = INT64_MIN, high: int = INT64_MAX) -> int:
    """Reject values that do not fit the integer columns."""
    if not low <= number <= high:
        raise RowParseError(f"{field} out of range ({value})")
    return number
