"""
Constants for the data.gouv.fr testing dataset and derived reports.
"""

# Exact header row of the "sp-pos-quot-dep" CSV
EXPECTED_CSV_HEADERS = ["dep", "jour", "P", "T", "cl_age90", "pop"]

CSV_DELIMITER = ";"

# Wire format for every date (CSV, query params and JSON)
DATE_FORMAT = "%Y-%m-%d"

# Days / records with this many tests or fewer are statistically unreliable
MIN_RELIABLE_TESTS = 10

# Length of the per age category daily leaderboard
TOP_RANKING_SIZE = 5
