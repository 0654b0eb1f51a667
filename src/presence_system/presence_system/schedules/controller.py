from __future__ import annotations

import io
from datetime import date, timedelta

from flask import Flask, jsonify, request, send_file
from werkzeug.utils import secure_filename

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response
from ..common.validators import require_positive_int
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import ShiftAssignment

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def assignment_to_json(a: ShiftAssignment) -> dict:
    return {
        "id": a.assignment_id,
        "employeeId": a.employee_id,
        "shiftId": a.shift_id,
        "assignedDate": a.assigned_date.strftime("%Y-%m-%d"),
        "shiftCode": a.shift_code.value,
        "status": a.status.value,
        "notes": a.notes,
    }


def register(app: Flask, container: Container) -> None:
    service = container.schedule_import_service

    def _parse_date(value: str, field_name: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None

    @app.route("/api/shift-assignments/import", methods=["POST"], endpoint="shift_assignments_import")
    def shift_assignments_import():
        """Upload a monthly schedule. Row problems are reported in the body, not as an HTTP error."""
        try:
            upload = request.files.get("file")
            if upload is None or not upload.filename:
                raise ValidationError("file is required")

            today = date.today()
            result = service.import_schedule(
                upload.read(),
                filename=secure_filename(upload.filename),
                month=request.form.get("month") or today.month,
                year=request.form.get("year") or today.year,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(result.to_dict()), 200

    @app.route("/api/shift-assignments/template", methods=["GET"], endpoint="shift_assignments_template")
    def shift_assignments_template():
        today = date.today()
        try:
            month = request.args.get("month") or today.month
            year = request.args.get("year") or today.year
            content = service.build_template(month, year)
        except DomainError as e:
            return error_response(e)

        filename = f"shift_schedule_{int(year)}_{int(month):02d}.xlsx"
        return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)

    @app.route("/api/shift-assignments", methods=["GET"], endpoint="shift_assignments_list")
    def shift_assignments_list():
        today = date.today()
        try:
            start = _parse_date(request.args.get("start") or today.strftime("%Y-%m-%d"), "start")
            end = _parse_date(request.args.get("end") or (today + timedelta(days=7)).strftime("%Y-%m-%d"), "end")
            employee_id_s = request.args.get("employeeId")
            employee_id = require_positive_int(employee_id_s, "employeeId") if employee_id_s else None

            assignments = service.list_assignments(start, end, employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify([assignment_to_json(a) for a in assignments]), 200
