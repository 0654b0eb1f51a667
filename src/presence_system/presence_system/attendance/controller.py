from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import AttendanceEvent


def event_to_json(event: AttendanceEvent) -> dict:
    return {
        "id": event.event_id,
        "employeeId": event.employee_id,
        "accessCodeId": event.access_code_id,
        "kioskId": event.kiosk_id,
        "date": event.event_date.strftime("%Y-%m-%d"),
        "checkInTime": event.check_in_time.isoformat(),
        "checkOutTime": event.check_out_time.isoformat() if event.check_out_time else None,
        "location": event.location,
        "status": event.status.value,
        "notes": event.notes,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/access-codes/scan", methods=["POST"], endpoint="access_codes_scan")
    def access_codes_scan():
        data = request.get_json(silent=True) or {}
        try:
            event = container.attendance_service.record_scan(data.get("code", ""), data.get("employeeId"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "event": event_to_json(event)}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        try:
            date_s = request.args.get("date")
            try:
                day = parse_iso_date(date_s) if date_s else date.today()
            except ValueError:
                raise ValidationError("date must be YYYY-MM-DD") from None
            events = container.attendance_service.list_for_date(day)
        except DomainError as e:
            return error_response(e)
        return jsonify([event_to_json(e) for e in events]), 200
