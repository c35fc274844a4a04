# ======================================================================
#  File......: storage_api.py
#  Purpose...: Storage job query layer (WMI MSFT_StorageJob -> JobSnapshot).
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import logging
from typing import Any, List

from errors import ProviderError
from models import JobSnapshot

logger = logging.getLogger(__name__)

DEFAULT_JOB_CLASS = "MSFT_StorageJob"


def _field(record: Any, name: str, default: str) -> str:
    value = getattr(record, name, None)
    return default if value is None else str(value)


def to_snapshot(record: Any) -> JobSnapshot:
    return JobSnapshot(
        name=_field(record, "Name", ""),
        percent_complete=_field(record, "PercentComplete", ""),
        bytes_processed=_field(record, "BytesProcessed", "0"),
        bytes_total=_field(record, "BytesTotal", "0"),
        elapsed_raw=_field(record, "ElapsedTime", ""),
    )


def fetch_jobs(conn, job_class: str = DEFAULT_JOB_CLASS) -> List[JobSnapshot]:
    """
    Return one snapshot per active job, in the order the provider lists them.
    Any failure while querying or reading records raises ProviderError;
    nothing is returned for a partially read result set.
    """
    try:
        records = conn.query(f"SELECT * FROM {job_class}")
        out = [to_snapshot(r) for r in records]
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(str(e)) from e

    logger.debug("Fetched %d %s record(s)", len(out), job_class)
    return out
