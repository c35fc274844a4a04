# ======================================================================
#  File......: estimator.py
#  Purpose...: Throughput / ETA estimation for a single storage job.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Sequence

from duration_codec import (
    format_bytes,
    format_duration,
    parse_general_interval,
    parse_structured_interval,
    try_parse_unsigned,
)
from errors import FormatError
from models import EstimateResult, JobSnapshot

logger = logging.getLogger(__name__)

ETA_UNKNOWN = "unknown"

_MAX_SECONDS = timedelta.max.total_seconds()


def _remaining(seconds: float) -> timedelta:
    # total < processed would give a negative ETA
    if seconds <= 0:
        return timedelta(0)
    if seconds >= _MAX_SECONDS:
        return timedelta.max
    return timedelta(seconds=seconds)


def estimate(job: JobSnapshot) -> EstimateResult:
    """
    Estimate throughput and remaining time for one job.

    Order of evaluation:
      1. processed > 0, total parses, structured elapsed > 0  -> real ETA
      2. both byte counts parse and elapsed is a plain duration -> ETA unknown
      3. anything else -> provider strings passed through verbatim

    Raises FormatError if the elapsed text looks structured but a field
    is not numeric.
    """
    elapsed = parse_structured_interval(job.elapsed_raw)
    processed = try_parse_unsigned(job.bytes_processed)
    total = try_parse_unsigned(job.bytes_total)
    elapsed_sec = elapsed.total_seconds()

    if processed is not None and total is not None and processed > 0 and elapsed_sec > 0:
        rate = processed / elapsed_sec
        remaining_sec = (total - processed) / rate
        return EstimateResult(
            processed=format_bytes(processed),
            total=format_bytes(total),
            elapsed=format_duration(elapsed),
            eta=format_duration(_remaining(remaining_sec)),
        )

    if processed is not None and total is not None:
        general = parse_general_interval(job.elapsed_raw)
        if general is not None:
            return EstimateResult(
                processed=format_bytes(processed),
                total=format_bytes(total),
                elapsed=format_duration(general),
            )

    return EstimateResult(
        processed=job.bytes_processed,
        total=job.bytes_total,
        elapsed=job.elapsed_raw,
    )


def estimate_all(jobs: Sequence[JobSnapshot], isolate_bad_records: bool = False) -> List[EstimateResult]:
    """Estimate every job in order. A bad record fails the batch unless isolated."""
    out: List[EstimateResult] = []
    for job in jobs:
        try:
            out.append(estimate(job))
        except FormatError as e:
            if not isolate_bad_records:
                raise
            logger.warning("Skipping malformed job record %r: %s", job.name, e)
            out.append(EstimateResult(processed="", total="", elapsed="", eta="", error=str(e)))
    return out
