from __future__ import annotations

import csv
import io
import logging
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.time_utils import parse_iso_date
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .service import REPORT_FIELDS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _fail(e: DomainError):
        status = 404 if isinstance(e, NotFoundError) else 400
        errors = e.errors if isinstance(e, ValidationError) else {}
        return jsonify({"success": False, "message": str(e), "errors": errors}), status

    def _server_error(action: str):
        logger.exception("Unexpected error while %s", action)
        return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    def _required_int(name: str) -> int:
        value = (request.args.get(name) or "").strip()
        if not value.isdigit():
            raise ValidationError(f"Thiếu hoặc sai tham số {name}", {name: f"{name} must be a positive integer"})
        return int(value)

    def _machine_ids() -> list[int]:
        raw = request.args.getlist("machine_id") or []
        values = [v.strip() for item in raw for v in item.split(",") if v.strip()]
        if not values or not all(v.isdigit() for v in values):
            raise ValidationError("Thiếu hoặc sai tham số machine_id", {"machine_id": "machine_id is required"})
        return [int(v) for v in values]

    def _range() -> tuple[date, date]:
        today = date.today()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS - 1)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return parse_iso_date(start_s), parse_iso_date(end_s)

    def _build_report():
        start, end = _range()
        data = container.case_report_service.build_case_report(
            machine_ids=_machine_ids(),
            start=start,
            end=end,
            calendar_id=_required_int("calendar_id"),
        )
        return start, end, data

    def _write_report_csv(*, data, filename: str):
        """Write classified segments to a CSV response."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/classification", methods=["GET"], endpoint="api_classification")
    def api_classification():
        try:
            day = parse_iso_date(request.args.get("date") or date.today().strftime("%Y-%m-%d"))
            result = container.classification_service.classify_day(
                machine_id=_required_int("machine_id"),
                day=day,
                calendar_id=_required_int("calendar_id"),
            )
            return jsonify(
                {
                    "success": True,
                    "machineId": result.machine_id,
                    "date": result.day.isoformat(),
                    "segments": [s.to_dict() for s in result.segments],
                }
            ), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("classifying a machine-day")

    @app.route("/api/classification/report", methods=["GET"], endpoint="api_classification_report")
    def api_classification_report():
        try:
            start, end, data = _build_report()
            return jsonify(
                {
                    "success": not data.failures,
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                    "rows": data.rows,
                    "summary": data.summary,
                    "failures": data.failures,
                }
            ), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("building the case report")

    @app.route("/api/classification/report.csv", methods=["GET"], endpoint="api_classification_report_csv")
    def api_classification_report_csv():
        try:
            start, end, data = _build_report()
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("exporting the case report")

        filename = f"case_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)
