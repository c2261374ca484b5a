from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .model import SETTING_KEYS, PolicyConfig

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _fail(e: DomainError):
        status = 404 if isinstance(e, NotFoundError) else 400
        errors = e.errors if isinstance(e, ValidationError) else {}
        return jsonify({"success": False, "message": str(e), "errors": errors}), status

    def _payload(policy: PolicyConfig) -> dict:
        return {"settings": policy.to_settings(), "affectedCases": policy.affected_cases()}

    def _calendar_or_404(calendar_id: int) -> None:
        if not container.calendars_repo.get_by_id(calendar_id):
            raise NotFoundError(f"Lịch làm việc không tồn tại: {calendar_id}")

    @app.route("/api/calendars/<int:calendar_id>/policy", methods=["GET"], endpoint="api_calendar_policy")
    def api_calendar_policy(calendar_id: int):
        try:
            _calendar_or_404(calendar_id)
            policy = PolicyConfig.from_settings(container.policies_repo.get_settings(calendar_id))
            return jsonify({"success": True, "data": _payload(policy)}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            logger.exception("Unexpected error while loading policy of calendar %s", calendar_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    @app.route("/api/calendars/<int:calendar_id>/policy", methods=["PUT"], endpoint="api_calendar_policy_update")
    def api_calendar_policy_update(calendar_id: int):
        try:
            _calendar_or_404(calendar_id)
            data = request.get_json(silent=True) or {}
            raw_buffer = data.get("lateBufferMinutes")
            if raw_buffer is not None and not str(raw_buffer).strip().isdigit():
                raise ValidationError(
                    "lateBufferMinutes must be a non-negative integer",
                    {"lateBufferMinutes": "Must be >= 0"},
                )

            current = container.policies_repo.get_settings(calendar_id)
            merged = {**current, **{k: data[k] for k in SETTING_KEYS if k in data}}
            policy = PolicyConfig.from_settings(merged)
            container.policies_repo.save_settings(calendar_id, policy.to_settings())
            logger.info("Updated policy of calendar %s: %s", calendar_id, policy.to_settings())
            return jsonify({"success": True, "data": _payload(policy)}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            logger.exception("Unexpected error while saving policy of calendar %s", calendar_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500
