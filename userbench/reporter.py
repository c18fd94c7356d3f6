import logging
import threading

logger = logging.getLogger("userbench.reporter")


class LiveThreadReporter(threading.Thread):
    """Logs the number of live threads every `interval` seconds until stopped."""

    def __init__(self, interval: float = 1.0, name: str = "live-thread-reporter"):
        if interval <= 0:
            raise ValueError(f"report interval must be > 0, got {interval}")
        super().__init__(name=name, daemon=True)
        self._stopped = threading.Event()
        self._interval = interval

    @staticmethod
    def sample() -> int:
        return threading.active_count()

    def run(self):
        logger.debug("Reporter started with interval %.2fs", self._interval)
        while True:
            logger.info("num threads %d", self.sample())
            if self._stopped.wait(self._interval):
                break
        logger.debug("Reporter stopped")

    def stop(self):
        self._stopped.set()
        if self.is_alive():
            self.join(timeout=self._interval + 1.0)
