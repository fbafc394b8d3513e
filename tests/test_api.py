"""Tests for the HTTP endpoints."""

from datetime import date

import pytest

from app.database import Base
from app.exceptions import FormatError, TransportError
from app.services.datagouv_source import parse_csv_text

DAY_1 = date(2020, 5, 13)
DAY_2 = date(2020, 5, 14)
DAY_3 = date(2020, 5, 15)


@pytest.fixture
def imported(client, fake_source, make_record):
    """Client after importing a small dataset through /api/import."""
    fake_source.records = [
        make_record(department="01", day=DAY_1, age_category=9, tests_total=5, tests_positive=1),
        make_record(department="01", day=DAY_2, age_category=9, tests_total=20, tests_positive=5),
        make_record(department="01", day=DAY_3, age_category=9, tests_total=50, tests_positive=40),
        make_record(department="02", day=DAY_3, age_category=9, tests_total=100, tests_positive=50),
        make_record(department="2A", day=DAY_3, age_category=19, tests_total=0, tests_positive=0),
    ]
    response = client.post("/api/import")
    assert response.status_code == 200
    return client


class TestImport:
    """Tests for /api/import."""

    def test_import(self, client, fake_source, make_record):
        fake_source.records = [make_record(department="01"), make_record(department="02")]

        response = client.get("/api/import")

        assert response.status_code == 200
        assert response.json() == {"result": "OK"}
        assert fake_source.calls == 1
        assert client.get("/api/departments").json() == ["01", "02"]

    def test_import_twice_keeps_counts(self, client, fake_source, make_record):
        fake_source.records = [make_record(department="01"), make_record(department="02")]

        client.post("/api/import")
        client.post("/api/import")

        records = client.get("/api/data", params={
            "from": "2020-05-13", "to": "2020-05-13", "departments": ["01", "02"]
        }).json()
        assert len(records) == 2

    @pytest.mark.parametrize("error", [
        TransportError("unable to retrieve csv file from url: connection refused"),
        FormatError("invalid csv headers - this csv format is not supported"),
    ])
    def test_source_failure(self, client, fake_source, error):
        fake_source.error = error

        response = client.post("/api/import")

        assert response.status_code == 500
        assert response.json() == {"error": str(error)}

    def test_out_of_range_row_does_not_block_import(self, client, fake_source):
        fake_source.records = parse_csv_text(
            "dep;jour;P;T;cl_age90;pop\n"
            "01;2020-05-13;1;20;09;1000\n"
            "02;2020-05-13;1;99999999999999999999;09;1000\n"
        )

        response = client.post("/api/import")

        assert response.status_code == 200
        assert client.get("/api/departments").json() == ["01"]

    def test_unbindable_value_is_a_storage_error(self, client, fake_source, make_record):
        fake_source.records = [make_record(department="01"), make_record(department="02", tests_total=2 ** 70)]

        response = client.post("/api/import")

        assert response.status_code == 500
        assert "cannot save reports" in response.json()["error"]
        assert client.get("/api/departments").json() == []

    def test_storage_failure(self, client, fake_source, make_record, engine):
        fake_source.records = [make_record()]
        Base.metadata.drop_all(engine)

        response = client.post("/api/import")

        assert response.status_code == 500
        assert "cannot save reports" in response.json()["error"]


class TestListings:
    """Tests for /api/departments, /api/age_categories and /api/days."""

    def test_departments(self, imported):
        assert sorted(imported.get("/api/departments").json()) == ["01", "02", "2A"]

    def test_age_categories(self, imported):
        assert sorted(imported.get("/api/age_categories").json()) == [9, 19]

    def test_days(self, imported):
        assert imported.get("/api/days").json() == {"from": "2020-05-13", "to": "2020-05-15"}

    def test_days_empty_store(self, client):
        assert client.get("/api/days").json() == {"from": None, "to": None}

    def test_storage_failure(self, client, engine):
        Base.metadata.drop_all(engine)

        response = client.get("/api/departments")

        assert response.status_code == 500
        assert "error" in response.json()


class TestData:
    """Tests for /api/data."""

    def test_filtered_records(self, imported):
        response = imported.get("/api/data", params={
            "from": "2020-05-14", "to": "2020-05-15", "departments": ["01", "2A"]
        })

        assert response.status_code == 200
        body = response.json()
        assert {(r["department"], r["day"]) for r in body} == {
            ("01", "2020-05-14"), ("01", "2020-05-15"), ("2A", "2020-05-15")
        }
        assert set(body[0]) == {
            "department", "day", "age_category", "tests_total", "tests_positive", "population"
        }

    @pytest.mark.parametrize("params, message", [
        ({"to": "2020-05-15", "departments": "01"}, "query param from is mandatory"),
        ({"from": "2020-05-13", "departments": "01"}, "query param to is mandatory"),
        ({"from": "2020-05-13", "to": "2020-05-15"}, "query param departments is mandatory"),
        ({"from": "13/05/2020", "to": "2020-05-15", "departments": "01"}, "from must be a date"),
        ({"from": "2020-05-13", "to": "2020-5-15", "departments": "01"}, "to must be a date"),
        ({"from": ["2020-05-13", "2020-05-14"], "to": "2020-05-15", "departments": "01"},
         "query param from is mandatory"),
    ])
    def test_invalid_parameters(self, client, params, message):
        response = client.get("/api/data", params=params)

        assert response.status_code == 400
        assert message in response.json()["error"]


class TestNational:
    """Tests for /api/national."""

    def test_national_reports(self, imported):
        response = imported.get("/api/national", params={"from": "2020-05-13", "to": "2020-05-15"})

        assert response.status_code == 200
        assert response.json() == [
            {"day": "2020-05-13", "tests_total": 5, "tests_positive": 1, "ratio": 0.2},
            {"day": "2020-05-14", "tests_total": 20, "tests_positive": 5, "ratio": 0.25},
            {"day": "2020-05-15", "tests_total": 150, "tests_positive": 90, "ratio": 0.6},
        ]

    def test_missing_parameter(self, client):
        response = client.get("/api/national", params={"from": "2020-05-13"})

        assert response.status_code == 400
        assert response.json() == {"error": "query param to is mandatory"}

    def test_validation_happens_before_storage(self, client, engine):
        """A broken database still yields 400 for a bad request."""
        Base.metadata.drop_all(engine)

        response = client.get("/api/national", params={"from": "yesterday", "to": "2020-05-15"})

        assert response.status_code == 400


class TestDepartmentResume:
    """Tests for /api/department."""

    def test_resume(self, imported):
        response = imported.get("/api/department", params={"department": "01"})

        assert response.status_code == 200
        assert response.json() == {
            "day_with_most_tests": "2020-05-15",
            "day_with_most_positives": "2020-05-15",
            "day_with_highest_ratio": "2020-05-15",
        }

    def test_no_reliable_day(self, imported):
        response = imported.get("/api/department", params={"department": "2A"})

        assert response.json() == {
            "day_with_most_tests": None,
            "day_with_most_positives": None,
            "day_with_highest_ratio": None,
        }

    def test_missing_department(self, client):
        response = client.get("/api/department")

        assert response.status_code == 400
        assert response.json() == {"error": "query param department is mandatory"}


class TestDailyTop5:
    """Tests for /api/daily_top5."""

    def test_top5(self, imported):
        response = imported.get("/api/daily_top5", params={"day": "2020-05-15"})

        assert response.status_code == 200
        top5 = response.json()["age_categories"]["9"]["top5"]
        assert [(r["department"], r["tests_positive"]) for r in top5] == [("01", 40), ("02", 50)]
        assert "19" not in response.json()["age_categories"]

    def test_invalid_day(self, client):
        response = client.get("/api/daily_top5", params={"day": "2020-13-01"})

        assert response.status_code == 400
        assert "day must be a date" in response.json()["error"]


class TestMisc:
    """Tests for the root, health and unknown routes."""

    def test_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "healthy"
        assert body["database"] == "healthy"

    def test_root_lists_endpoints(self, client):
        assert client.get("/").json()["endpoints"]["daily_top5"] == "/api/daily_top5"

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert "error" in response.json()
