from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..container import Container
from ..core.exceptions import DomainError
from .model import AccessCode, Kiosk


def code_to_json(code: AccessCode) -> dict:
    return {
        "id": code.code_id,
        "code": code.code,
        "screenId": code.screen_id,
        "branchId": code.branch_id,
        "expiresAt": code.expires_at.isoformat(),
        "isActive": code.is_active,
        "createdAt": code.created_at.isoformat() if code.created_at else None,
    }


def kiosk_to_json(kiosk: Kiosk) -> dict:
    return {
        "id": kiosk.kiosk_id,
        "screenId": kiosk.screen_id,
        "branchId": kiosk.branch_id,
        "displayName": kiosk.display_name,
        "active": kiosk.active,
        "lastActivityAt": kiosk.last_activity_at.isoformat() if kiosk.last_activity_at else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.access_code_service

    @app.route("/api/kiosks/<screen_id>/code", methods=["GET"], endpoint="kiosk_code")
    def kiosk_code(screen_id: str):
        """Kiosk poll: same code until it expires, then a fresh one."""
        try:
            current = service.poll_kiosk(screen_id)
        except DomainError as e:
            return error_response(e)

        body = code_to_json(current.code)
        body["branchName"] = current.branch_name
        body["displayName"] = current.kiosk.display_name
        return jsonify(body), 200

    @app.route("/api/kiosks/<screen_id>/code.png", methods=["GET"], endpoint="kiosk_code_png")
    def kiosk_code_png(screen_id: str):
        try:
            current = service.poll_kiosk(screen_id)
            png = service.render_qr_png(current.code.code)
        except DomainError as e:
            return error_response(e)

        return app.response_class(png, mimetype="image/png", headers={"Cache-Control": "no-store"})

    @app.route("/api/kiosks", methods=["GET"], endpoint="kiosk_list")
    def kiosk_list():
        try:
            kiosks = service.list_kiosks()
        except DomainError as e:
            return error_response(e)
        return jsonify([kiosk_to_json(k) for k in kiosks]), 200

    @app.route("/api/kiosks/<screen_id>", methods=["GET"], endpoint="kiosk_detail")
    def kiosk_detail(screen_id: str):
        try:
            kiosk = service.get_kiosk(screen_id)
            service.touch_kiosk(kiosk.screen_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(kiosk_to_json(kiosk)), 200

    @app.route("/api/access-codes/active", methods=["GET"], endpoint="access_codes_active")
    def access_codes_active():
        try:
            codes = service.list_active(request.args.get("screenId") or None)
        except DomainError as e:
            return error_response(e)
        return jsonify([code_to_json(c) for c in codes]), 200

    @app.route("/api/access-codes", methods=["POST"], endpoint="access_codes_create")
    def access_codes_create():
        data = request.get_json(silent=True) or {}
        try:
            code = service.create_manual(data.get("branchId"), data.get("expiryMinutes"))
        except DomainError as e:
            return error_response(e)
        return jsonify(code_to_json(code)), 201

    @app.route("/api/access-codes", methods=["DELETE"], endpoint="access_codes_expire_all")
    def access_codes_expire_all():
        try:
            count = service.expire_all()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "expiredCount": count}), 200

    @app.route("/api/access-codes/validate", methods=["POST"], endpoint="access_codes_validate")
    def access_codes_validate():
        data = request.get_json(silent=True) or {}
        try:
            result = service.validate(data.get("code", ""))
        except DomainError as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "code": code_to_json(result.code),
            "kiosk": kiosk_to_json(result.kiosk) if result.kiosk else None,
        }), 200
