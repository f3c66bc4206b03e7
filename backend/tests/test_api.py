"""
HTTP surface tests.

Tests:
  - test_health                      : GET /health → ok
  - test_analyze_batch               : POST /api/analysis → full report
  - test_analyze_invalid_batch       : duplicate ids → 422 with every violation
  - test_analyze_employee            : POST /api/analysis/employee → overall score
  - test_config                      : GET /api/analysis/config → defaults
  - test_upload_valid_excel          : upload → status partial, report attached
  - test_upload_invalid_file_format  : .txt → 400
  - test_upload_no_usable_rows       : nothing parseable → 400 with parse errors
"""

from __future__ import annotations

from pathlib import Path

from httpx import AsyncClient

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _payload(record) -> dict:
    return record.model_dump(mode="json", by_alias=True)


async def _upload(client: AsyncClient, file_path: Path):
    with open(file_path, "rb") as f:
        return await client.post(
            "/api/files/upload",
            files={"file": (file_path.name, f, XLSX_MIME)},
        )


class TestSystem:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestAnalysisRoutes:
    async def test_analyze_batch(self, client: AsyncClient, make_employee) -> None:
        body = {
            "employees": [
                _payload(make_employee("E001")),
                _payload(make_employee("E002", punches={2: []})),
            ]
        }
        resp = await client.post("/api/analysis", json=body)
        assert resp.status_code == 200, resp.text
        data = resp.json()

        assert data["total_employees"] == 2
        assert data["employees_with_issues"] == 1
        assert data["issues"][0]["employee"]["id"] == "E002"
        assert data["issues"][0]["issues"][0]["type"] == "ABSENT"
        assert data["severity_breakdown"] == {"high": 1, "medium": 0}
        assert len(data["daily_breakdown"]) == 30

    async def test_camel_case_payload(self, client: AsyncClient) -> None:
        body = {
            "employees": [{
                "id": "E001",
                "name": "Asha Rao",
                "days": [
                    {"day": 2, "isWeekend": False, "isHoliday": False, "punchTimes": ["09:45", "18:45"]},
                    {"day": 7, "isWeekend": True, "isHoliday": False, "punchTimes": []},
                ],
            }]
        }
        resp = await client.post("/api/analysis", json=body)
        assert resp.status_code == 200, resp.text
        statuses = [d["status"] for d in resp.json()["employees"][0]["days"]]
        assert statuses == ["Present", "WeekendOff"]

    async def test_analyze_invalid_batch(self, client: AsyncClient, make_employee) -> None:
        body = {"employees": [_payload(make_employee("E001")), _payload(make_employee("E001"))]}
        resp = await client.post("/api/analysis", json=body)

        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["message"] == "Data validation failed"
        assert detail["violation_count"] == 1
        assert "appears more than once" in detail["violations"][0]

    async def test_analyze_empty_batch(self, client: AsyncClient) -> None:
        resp = await client.post("/api/analysis", json={"employees": []})
        assert resp.status_code == 422
        assert resp.json()["detail"]["violations"] == ["No employees supplied"]

    async def test_analyze_employee(self, client: AsyncClient, make_employee) -> None:
        resp = await client.post("/api/analysis/employee", json=_payload(make_employee()))
        assert resp.status_code == 200, resp.text
        data = resp.json()

        assert data["employee"]["id"] == "E001"
        assert data["overall_score"]["overall_score"] == 100
        assert data["overall_score"]["rating"] == "Excellent"
        assert data["issues"] == []

    async def test_config(self, client: AsyncClient) -> None:
        resp = await client.get("/api/analysis/config")
        assert resp.status_code == 200
        data = resp.json()

        assert data["check_in_time"] == "10:01"
        assert data["check_out_time"] == "18:30"
        assert data["regular_required_hours"] == 8.75
        assert data["unusual_required_hours"] == 9.0


class TestUpload:
    async def test_upload_valid_excel(self, client: AsyncClient, sample_excel_path: Path) -> None:
        """Sample sheet has one bad row: analysis still runs, status is partial."""
        resp = await _upload(client, sample_excel_path)
        assert resp.status_code == 200, resp.text
        data = resp.json()

        assert data["filename"] == "punches.xlsx"
        assert data["employee_count"] == 2
        assert data["error_count"] == 1
        assert data["status"] == "partial"
        report = data["report"]
        assert report["total_employees"] == 2
        assert report["absence_summary"]["total_absent_days"] == 1
        assert report["late_arrival_summary"]["total_late_days"] == 1

    async def test_upload_invalid_file_format(self, client: AsyncClient, tmp_path: Path) -> None:
        path = tmp_path / "punches.txt"
        path.write_text("E001,Asha Rao,2,09:45 18:45")

        resp = await _upload(client, path)
        assert resp.status_code == 400
        assert "Unsupported file type" in resp.json()["detail"]

    async def test_upload_no_usable_rows(self, client: AsyncClient, invalid_excel_path: Path) -> None:
        resp = await _upload(client, invalid_excel_path)
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["message"] == "No usable employee rows found"
        assert len(detail["errors"]) == 2
