from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _fail(e: DomainError):
        status = 404 if isinstance(e, NotFoundError) else 400
        errors = e.errors if isinstance(e, ValidationError) else {}
        return jsonify({"success": False, "message": str(e), "errors": errors}), status

    def _server_error(action: str):
        logger.exception("Unexpected error while %s", action)
        return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    @app.route("/api/shift-templates", methods=["GET"], endpoint="api_shift_templates")
    def api_shift_templates():
        try:
            templates = container.shift_template_service.list_templates()
            return jsonify({"success": True, "data": [t.to_dict() for t in templates]}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("listing shift templates")

    @app.route("/api/shift-templates", methods=["POST"], endpoint="api_shift_templates_create")
    def api_shift_templates_create():
        try:
            template = container.shift_template_service.create(request.get_json(silent=True) or {})
            return jsonify({"success": True, "data": template.to_dict()}), 201
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("creating a shift template")

    @app.route("/api/shift-templates/validate", methods=["POST"], endpoint="api_shift_templates_validate")
    def api_shift_templates_validate():
        try:
            errors = container.shift_template_service.validate(request.get_json(silent=True) or {})
            return jsonify({"success": not errors, "errors": errors}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("validating a shift template")

    @app.route("/api/shift-templates/<int:template_id>", methods=["GET"], endpoint="api_shift_template_detail")
    def api_shift_template_detail(template_id: int):
        try:
            template = container.shift_template_service.get(template_id)
            return jsonify({"success": True, "data": template.to_dict()}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("loading a shift template")

    @app.route("/api/shift-templates/<int:template_id>", methods=["PUT"], endpoint="api_shift_template_update")
    def api_shift_template_update(template_id: int):
        try:
            template = container.shift_template_service.update(template_id, request.get_json(silent=True) or {})
            return jsonify({"success": True, "data": template.to_dict()}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("updating a shift template")

    @app.route("/api/shift-templates/<int:template_id>", methods=["DELETE"], endpoint="api_shift_template_delete")
    def api_shift_template_delete(template_id: int):
        try:
            container.shift_template_service.delete(template_id)
            return jsonify({"success": True}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("deleting a shift template")

    @app.route(
        "/api/shift-templates/<int:template_id>/week-summary",
        methods=["GET"],
        endpoint="api_shift_template_week_summary",
    )
    def api_shift_template_week_summary(template_id: int):
        try:
            summary = container.shift_template_service.week_summary(template_id)
            return jsonify({"success": True, "data": summary.to_dict()}), 200
        except DomainError as e:
            return _fail(e)
        except Exception:
            return _server_error("summarizing a shift template")
