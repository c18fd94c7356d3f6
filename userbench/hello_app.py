from flask import Flask, Response

from userbench.config import Config
from userbench.errors import register_error_handlers
from userbench.records import generate_users

HELLO_ROUTE = "/api/v1/users"
GREETING = "Hello, World 👋!"
# Never served or otherwise observed; only the discarded startup list carries it
HELLO_FRAMEWORK_LABEL = "Golang (fiber)"


def create_hello_app(config_class: type = Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    register_error_handlers(app)

    # Built once at startup and never served
    generate_users(start=1, framework=HELLO_FRAMEWORK_LABEL)

    @app.get(HELLO_ROUTE)
    def hello():
        return Response(GREETING, mimetype="text/plain")

    return app
