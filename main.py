# ======================================================================
#  File......: main.py
#  Purpose...: Single entrypoint: poll scheduler + Bokeh status page + tray
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import logging
import threading
import webbrowser
from functools import partial

from bokeh.application import Application
from bokeh.application.handlers.function import FunctionHandler
from bokeh.server.server import Server

import app_tray
from agent import PollScheduler
from dashboard import build_document
from settings import MonitorSettings, ensure_config, load_settings
from storage_connector import make_fetcher

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _start_bokeh_server(scheduler: PollScheduler, port: int) -> Server:
    app = Application(FunctionHandler(partial(build_document, scheduler=scheduler)))

    server = Server(
        {"/status": app},
        port=port,
        allow_websocket_origin=[f"localhost:{port}"],
    )

    server.start()
    threading.Thread(target=server.io_loop.start, daemon=True).start()
    return server


def build_scheduler(settings: MonitorSettings) -> PollScheduler:
    return PollScheduler(
        make_fetcher(settings.namespace, settings.job_class),
        poll_interval_sec=settings.poll_interval_sec,
        fetch_timeout_sec=settings.fetch_timeout_sec,
        isolate_bad_records=settings.isolate_bad_records,
    )


def main():
    ensure_config()
    settings = load_settings()
    setup_logging(settings.log_level)

    scheduler = build_scheduler(settings)
    server = _start_bokeh_server(scheduler, settings.port)
    scheduler.start(block=False)
    url = f"http://localhost:{settings.port}/status"
    logger.info("Status page at %s", url)

    app_tray.run_tray(
        scheduler,
        on_open=lambda: webbrowser.open(url),
        on_exit=lambda: server.io_loop.stop(),
    )


if __name__ == "__main__":
    main()
