import os

from userbench.gate import available_processors


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Listener and gate are fixed; override only through CLI flags
    HOST = "0.0.0.0"
    PORT = 3000
    THREADED = True

    # Concurrency gate (users app only)
    GATE_PERMITS = available_processors()

    # Live thread reporter
    REPORT_INTERVAL = 1.0  # seconds

    # Logging
    LOG_LEVEL = os.getenv("USERBENCH_LOG_LEVEL", "INFO")
    LOG_JSON = _env_bool("USERBENCH_LOG_JSON", "false")
