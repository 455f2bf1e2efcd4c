from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.constants import MSG_INTERNAL_ERROR
from ..core.exceptions import ConflictError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/signup", methods=["POST"], endpoint="auth_signup")
    def auth_signup():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}

        try:
            credential = container.signup_service.signup(
                name=body.get("name"),
                email=body.get("email"),
                password=body.get("password"),
                role=body.get("role"),
            )
            return jsonify({"message": "Signup successful", "user": credential.to_public_dict()}), 201
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except ConflictError as e:
            return jsonify({"error": str(e)}), 409
        except Exception:
            logger.exception("Signup error")
            return jsonify({"error": MSG_INTERNAL_ERROR}), 500
