import threading

import pytest

from userbench.config import Config
from userbench.gate import PermitGate
from userbench.hello_app import create_hello_app
from userbench.server import FixtureServer
from userbench.users_app import create_users_app


class FixtureConfig(Config):
    TESTING = True
    GATE_PERMITS = 2


@pytest.fixture
def gate():
    return PermitGate(FixtureConfig.GATE_PERMITS)


@pytest.fixture
def users_app(gate):
    return create_users_app(FixtureConfig, gate=gate)


@pytest.fixture
def users_client(users_app):
    return users_app.test_client()


@pytest.fixture
def hello_app():
    return create_hello_app(FixtureConfig)


@pytest.fixture
def hello_client(hello_app):
    return hello_app.test_client()


@pytest.fixture
def live_hello_server(hello_app):
    """Real threaded server on an ephemeral port; yields its base URL."""
    server = FixtureServer(hello_app, "127.0.0.1", 0, threaded=True)
    t = threading.Thread(target=server.serve, kwargs={"install_signal_handlers": False}, daemon=True)
    t.start()
    yield f"http://127.0.0.1:{server.port}"
    server.shutdown()
    t.join(timeout=5)
