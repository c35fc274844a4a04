# ======================================================================
#  File......: settings.py
#  Purpose...: monitor_config.ini loading (poll period, WMI class, port).
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------

HERE = os.path.abspath(os.path.dirname(__file__))
CONFIG_PATH = os.path.join(HERE, "monitor_config.ini")
SECTION = "monitor"
VERSION = "v1.0.0"

DEFAULTS = {
    "poll_interval_ms": "5000",
    "namespace": "root/Microsoft/Windows/Storage",
    "job_class": "MSFT_StorageJob",
    "fetch_timeout_sec": "30",
    "isolate_bad_records": "no",
    "port": "5007",
    "log_level": "INFO",
}


@dataclass(frozen=True)
class MonitorSettings:
    poll_interval_ms: int = 5000
    namespace: str = "root/Microsoft/Windows/Storage"
    job_class: str = "MSFT_StorageJob"
    fetch_timeout_sec: float = 30.0
    isolate_bad_records: bool = False
    port: int = 5007
    log_level: str = "INFO"

    @property
    def poll_interval_sec(self) -> float:
        return self.poll_interval_ms / 1000.0


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def ensure_config(path: str = CONFIG_PATH) -> None:
    """Write a config file with defaults if none exists yet."""
    if os.path.exists(path):
        return

    cfg = configparser.ConfigParser()
    cfg[SECTION] = dict(DEFAULTS)
    with open(path, "w") as f:
        cfg.write(f)
    logger.info("Wrote default monitor config to %s", path)


def _positive(value, key: str):
    if value <= 0:
        raise ValueError(f"[{SECTION}] {key} must be positive, got {value}")
    return value


def load_settings(path: Optional[str] = CONFIG_PATH) -> MonitorSettings:
    """
    Read monitor settings. Missing keys (or a missing file) fall back to
    defaults; malformed values raise ValueError naming the key.
    """
    cfg = configparser.ConfigParser()
    cfg[SECTION] = dict(DEFAULTS)
    if path and os.path.exists(path):
        cfg.read(path)

    sec = cfg[SECTION]
    try:
        poll_ms = _positive(sec.getint("poll_interval_ms"), "poll_interval_ms")
        timeout = _positive(sec.getfloat("fetch_timeout_sec"), "fetch_timeout_sec")
        port = _positive(sec.getint("port"), "port")
        isolate = sec.getboolean("isolate_bad_records")
    except ValueError as e:
        raise ValueError(f"Invalid value in {path}: {e}") from e

    namespace = (sec.get("namespace") or "").strip()
    job_class = (sec.get("job_class") or "").strip()
    if not namespace or not job_class:
        raise ValueError(f"[{SECTION}] namespace and job_class must not be empty")

    level = (sec.get("log_level") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"[{SECTION}] log_level '{level}' is not a logging level")

    return MonitorSettings(
        poll_interval_ms=poll_ms,
        namespace=namespace,
        job_class=job_class,
        fetch_timeout_sec=timeout,
        isolate_bad_records=isolate,
        port=port,
        log_level=level,
    )
