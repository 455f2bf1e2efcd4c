from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.validators import first_non_empty
from ..core.constants import MSG_INTERNAL_ERROR
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, InternalError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def register(app: Flask, container: Container) -> None:
    def login_response(role: Optional[Role]):
        body = _json_body()
        identifier = first_non_empty(body.get("identifier"), body.get("username"), body.get("email"))
        password = body.get("password")

        try:
            credential = container.credential_resolver.authenticate(identifier, password, role=role)
            return jsonify({"success": True, "user": credential.to_public_dict()})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"error": str(e)}), 401
        except InternalError:
            return jsonify({"error": MSG_INTERNAL_ERROR}), 500
        except Exception:
            logger.exception("Unified login error")
            return jsonify({"error": MSG_INTERNAL_ERROR}), 500

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        return login_response(None)

    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        return login_response(Role.SUPERADMIN)

    @app.route("/supervisors/login", methods=["POST"], endpoint="supervisor_login")
    def supervisor_login():
        return login_response(Role.SUPERVISOR)

    @app.route("/clients/login", methods=["POST"], endpoint="client_login")
    def client_login():
        return login_response(Role.CLIENT)
