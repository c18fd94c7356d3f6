from typing import Optional

from flask import Flask, jsonify

from userbench.config import Config
from userbench.errors import register_error_handlers
from userbench.gate import PermitGate
from userbench.records import generate_users

USERS_ROUTE = "/api/v1/users"


def create_users_app(config_class: type = Config, gate: Optional[PermitGate] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)
    # Keep record fields in declaration order
    app.json.sort_keys = False

    if gate is None:
        gate = PermitGate(app.config.get("GATE_PERMITS"))
    app.extensions["permit_gate"] = gate

    register_error_handlers(app)

    @app.get(USERS_ROUTE)
    @gate.limit
    def list_users():
        return jsonify([user.to_dict() for user in generate_users()]), 200

    return app
