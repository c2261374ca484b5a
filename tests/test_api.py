from __future__ import annotations

from datetime import datetime

import pytest

from shift_calendar.main import create_app
from shift_calendar.runstate.model import RunStateInterval


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def test_list_and_get_templates(client):
    listed = client.get("/api/shift-templates")
    detail = client.get("/api/shift-templates/1")

    assert listed.status_code == 200
    assert [t["code"] for t in listed.get_json()["data"]] == ["2S"]
    assert detail.get_json()["data"]["definitions"][1]["endTime"] == "00:00"


def test_missing_template_is_404(client):
    resp = client.get("/api/shift-templates/42")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_create_invalid_template_returns_error_map(client):
    resp = client.post("/api/shift-templates", json={"code": "", "name": "X", "definitions": []})

    body = resp.get_json()
    assert resp.status_code == 400
    assert body["errors"]["code"] == "Code is required"
    assert body["errors"]["definitions"] == "At least one shift definition is required"


def test_validate_endpoint(client):
    resp = client.post(
        "/api/shift-templates/validate",
        json={
            "code": "X",
            "name": "X",
            "definitions": [{"name": "A", "startTime": "08:00", "endTime": "16:00", "days": []}],
        },
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"success": False, "errors": {"def-0-days": "Select at least one day"}}


def test_week_summary_endpoint(client):
    resp = client.get("/api/shift-templates/1/week-summary")

    data = resp.get_json()["data"]
    assert data["grandTotal"] == 77.5
    assert data["totalsPerDay"]["monday"] == 15.5


def test_classification_endpoint(client, fakes):
    fakes.run_states.intervals[3] = [
        RunStateInterval(datetime(2026, 10, 20, 0), datetime(2026, 10, 20, 4), True),
    ]

    resp = client.get("/api/classification?machine_id=3&calendar_id=1&date=2026-10-20")

    segments = resp.get_json()["segments"]
    running = [(s["start"][11:16], s["caseId"]) for s in segments if s["isRunning"]]
    assert resp.status_code == 200
    assert running == [("00:00", 5), ("02:00", 6)]


def test_classification_requires_machine_id(client):
    resp = client.get("/api/classification?calendar_id=1&date=2026-10-20")

    assert resp.status_code == 400
    assert "machine_id" in resp.get_json()["errors"]


def test_classification_bad_date(client):
    resp = client.get("/api/classification?machine_id=1&calendar_id=1&date=20-10-2026")

    assert resp.status_code == 400


def test_report_csv_export(client, fakes):
    fakes.run_states.intervals[3] = [
        RunStateInterval(datetime(2026, 10, 19, 10), datetime(2026, 10, 19, 11), False),
    ]

    resp = client.get("/api/classification/report.csv?machine_id=3&calendar_id=1&start=2026-10-19&end=2026-10-19")

    text = resp.data.decode("utf-8-sig")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert text.splitlines()[0].startswith("machine_id,work_date,start,end")
    assert "Shift Loss" in text


def test_report_json_with_several_machines(client):
    resp = client.get("/api/classification/report?machine_id=1,2&calendar_id=1&start=2026-10-19&end=2026-10-20")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert {r["machine_id"] for r in body["rows"]} == {1, 2}


def test_policy_read_and_update(client, fakes):
    updated = client.put("/api/calendars/1/policy", json={"lateBufferMinutes": 60, "mergeCase5ToLatest": True})
    read = client.get("/api/calendars/1/policy")

    assert updated.status_code == 200
    assert fakes.policies.settings[1]["lateBufferMinutes"] == "60"
    assert read.get_json()["data"]["settings"]["mergeCase5ToLatest"] == "true"
    assert read.get_json()["data"]["affectedCases"] == [5, 6]


def test_policy_rejects_negative_buffer(client):
    resp = client.put("/api/calendars/1/policy", json={"lateBufferMinutes": -5})

    assert resp.status_code == 400
    assert "lateBufferMinutes" in resp.get_json()["errors"]


def test_policy_unknown_calendar(client):
    assert client.get("/api/calendars/9/policy").status_code == 404


def test_report_rejects_oversized_date_range(client):
    resp = client.get("/api/classification/report?machine_id=1&calendar_id=1&start=1900-01-01&end=2100-01-01")

    assert resp.status_code == 400
    assert "end" in resp.get_json()["errors"]
