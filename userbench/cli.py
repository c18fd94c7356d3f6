import click

from userbench.config import Config
from userbench.gate import PermitGate
from userbench.hello_app import create_hello_app
from userbench.loadgen import run_load
from userbench.logging_config import setup_logging
from userbench.reporter import LiveThreadReporter
from userbench.server import run_fixture
from userbench.users_app import create_users_app


@click.command()
@click.option("--host", default=Config.HOST, show_default=True)
@click.option("--port", type=int, default=Config.PORT, show_default=True)
@click.option("--permits", type=click.IntRange(min=1), default=Config.GATE_PERMITS, show_default=True,
              help="Concurrent handler limit")
@click.option("--report-interval", type=click.FloatRange(min=0, min_open=True),
              default=Config.REPORT_INTERVAL, show_default=True,
              help="Seconds between live thread count lines")
def users(host: str, port: int, permits: int, report_interval: float):
    """Serve 1000 synthetic user records as JSON on /api/v1/users."""
    setup_logging(Config)
    reporter = LiveThreadReporter(interval=report_interval)
    reporter.start()
    app = create_users_app(Config, gate=PermitGate(permits))
    run_fixture(app, host, port, threaded=Config.THREADED, cleanups=[("reporter", reporter.stop)])


@click.command()
@click.option("--host", default=Config.HOST, show_default=True)
@click.option("--port", type=int, default=Config.PORT, show_default=True)
def hello(host: str, port: int):
    """Serve a static greeting on /api/v1/users."""
    setup_logging(Config)
    run_fixture(create_hello_app(Config), host, port, threaded=Config.THREADED)


@click.command()
@click.option("--url", default=f"http://127.0.0.1:{Config.PORT}/api/v1/users", show_default=True)
@click.option("--requests", "total", type=click.IntRange(min=0), default=200, show_default=True)
@click.option("--concurrency", type=click.IntRange(min=1), default=16, show_default=True)
@click.option("--timeout", type=float, default=10.0, show_default=True)
def load(url: str, total: int, concurrency: int, timeout: float):
    """Hammer a running fixture and print a latency summary."""
    setup_logging(Config)
    report = run_load(url, total=total, concurrency=concurrency, timeout=timeout)
    click.echo(report.summary())
    if report.failed:
        raise SystemExit(1)
