# ======================================================================
#  File......: storage_connector.py
#  Purpose...: WMI connection to the Storage Spaces namespace (pywin32/wmi)
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
#
#  Notes:
#    - COM must be initialised per thread; every fetch runs on its own
#      worker thread (see agent.py), so the connection is opened and
#      released inside that thread.
# ======================================================================

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List

import pythoncom
import wmi

from errors import ProviderError
from models import JobSnapshot
from storage_api import DEFAULT_JOB_CLASS, fetch_jobs

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "root/Microsoft/Windows/Storage"


@contextmanager
def wmi_connection(namespace: str = DEFAULT_NAMESPACE) -> Iterator["wmi._wmi_namespace"]:
    """Open a WMI namespace for the current thread."""
    pythoncom.CoInitialize()
    try:
        try:
            conn = wmi.WMI(namespace=namespace)
        except Exception as e:
            logger.warning("WMI connect to %s failed: %s", namespace, e)
            raise ProviderError(str(e)) from e
        yield conn
    finally:
        pythoncom.CoUninitialize()


def make_fetcher(
    namespace: str = DEFAULT_NAMESPACE,
    job_class: str = DEFAULT_JOB_CLASS,
) -> Callable[[], List[JobSnapshot]]:
    """Zero-argument callable doing one connect + query; used once per cycle."""

    def fetch() -> List[JobSnapshot]:
        with wmi_connection(namespace) as conn:
            return fetch_jobs(conn, job_class)

    return fetch
