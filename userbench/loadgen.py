import logging
import math
import statistics
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger("userbench.loadgen")


@dataclass
class LoadReport:
    total: int
    ok: int = 0
    failed: int = 0
    elapsed: float = 0.0
    latencies: List[float] = field(default_factory=list)
    statuses: Dict[str, int] = field(default_factory=dict)

    def record(self, status: Optional[int], latency: float) -> None:
        label = str(status) if status is not None else "error"
        self.statuses[label] = self.statuses.get(label, 0) + 1
        if status is not None and 200 <= status < 300:
            self.ok += 1
            self.latencies.append(latency)
        else:
            self.failed += 1

    @property
    def median(self) -> float:
        return statistics.median(self.latencies) if self.latencies else 0.0

    @property
    def p95(self) -> float:
        if not self.latencies:
            return 0.0
        ordered = sorted(self.latencies)
        # nearest-rank percentile
        return ordered[max(0, math.ceil(95 * len(ordered) / 100) - 1)]

    @property
    def requests_per_second(self) -> float:
        return self.ok / self.elapsed if self.elapsed > 0 else 0.0

    def summary(self) -> str:
        return (
            f"OK {self.ok}/{self.total} failed={self.failed} in {self.elapsed:.2f}s"
            f" | ok/s={self.requests_per_second:.2f} median={self.median:.3f}s p95={self.p95:.3f}s"
        )


def run_load(url: str, total: int = 100, concurrency: int = 8, timeout: float = 10.0,
             session_factory: Callable[[], requests.Session] = requests.Session) -> LoadReport:
    """
    Issue `total` GET requests against `url` from `concurrency` worker threads.
    Each worker keeps its own session; transport errors count as failures.
    """
    if total < 0:
        raise ValueError("total must be >= 0")
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")

    local = threading.local()
    sessions: List[requests.Session] = []
    sessions_lock = threading.Lock()

    def _session() -> requests.Session:
        sess = getattr(local, "session", None)
        if sess is None:
            sess = session_factory()
            local.session = sess
            with sessions_lock:
                sessions.append(sess)
        return sess

    def one(i: int) -> Tuple[Optional[int], float]:
        t0 = time.perf_counter()
        try:
            resp = _session().get(url, timeout=timeout)
        except requests.RequestException as exc:
            logger.debug("request %d failed: %s", i, exc)
            return None, time.perf_counter() - t0
        return resp.status_code, time.perf_counter() - t0

    report = LoadReport(total=total)
    t0 = time.perf_counter()
    try:
        with ThreadPoolExecutor(max_workers=concurrency) as pool:
            futs = [pool.submit(one, i) for i in range(total)]
            for f in as_completed(futs):
                status, latency = f.result()
                report.record(status, latency)
    finally:
        for sess in sessions:
            sess.close()
    report.elapsed = time.perf_counter() - t0
    logger.debug("%s", report.summary())
    return report
