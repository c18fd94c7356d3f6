import logging
import signal
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from werkzeug.serving import make_server

logger = logging.getLogger("userbench.server")


class FixtureServer:
    """
    Threaded werkzeug server for one fixture app.
    The socket is bound in the constructor, so a busy port fails before
    serve() is ever reached.
    """

    def __init__(self, app, host: str, port: int, threaded: bool = True):
        self._app = app
        self._host = host
        self._threaded = threaded
        self._server = make_server(host, port, app, threaded=threaded)
        self._shutdown_initiated = threading.Event()
        self._cleanups: List[Tuple[str, Callable[[], None]]] = []

    @property
    def port(self) -> int:
        return self._server.server_port

    def add_cleanup(self, name: str, fn: Callable[[], None]) -> None:
        self._cleanups.append((name, fn))

    def serve(self, install_signal_handlers: bool = True) -> None:
        logger.info("Listening on %s:%d (threaded=%s)", self._host, self.port, self._threaded)
        if install_signal_handlers:
            self._install_signal_handlers()
        try:
            self._server.serve_forever()
        finally:
            self._run_cleanups()
            self.close()
            logger.info("Shutdown complete")

    def close(self) -> None:
        self._server.server_close()

    def shutdown(self) -> None:
        if self._shutdown_initiated.is_set():
            return
        self._shutdown_initiated.set()
        # serve_forever() must be stopped from a thread other than its own
        threading.Thread(target=self._server.shutdown, name="server-shutdown", daemon=True).start()

    def _install_signal_handlers(self) -> None:
        def handler(signum, frame):
            logger.info("Received signal %s - shutting down", signum)
            self.shutdown()

        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                signal.signal(sig, handler)
            except ValueError:
                # Only the main thread may install handlers
                logger.debug("Signal handlers not installed outside the main thread")
                return

    def _run_cleanups(self) -> None:
        for name, fn in reversed(self._cleanups):
            try:
                fn()
            except Exception:
                logger.exception("Cleanup hook %r failed", name)


def run_fixture(app, host: str, port: int, threaded: bool = True,
                cleanups: Optional[Iterable[Tuple[str, Callable[[], None]]]] = None) -> None:
    """Bind and serve `app` until signalled. A failed bind exits with status 1."""
    try:
        server = FixtureServer(app, host, port, threaded=threaded)
    except (OSError, SystemExit) as exc:
        # werkzeug reports bind errors itself and raises SystemExit
        logger.error("Could not listen on %s:%d (%s)", host, port, exc)
        raise SystemExit(1) from exc

    for name, fn in cleanups or ():
        server.add_cleanup(name, fn)
    server.serve()
