# ======================================================================
#  File......: report.py
#  Purpose...: Renders job snapshots + estimates into the status text.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

from typing import List, Sequence

from estimator import estimate_all
from models import EstimateResult, JobSnapshot, Report

NO_JOBS_TEXT = "No repair or regeneration job running"
SEPARATOR = " · "


def render_line(job: JobSnapshot, est: EstimateResult) -> str:
    if est.error:
        return f"{job.name}: Error: {est.error}"
    return SEPARATOR.join([
        f"{job.name}: {job.percent_complete}%",
        f"{est.processed} / {est.total}",
        est.elapsed,
        f"ETA {est.eta}",
    ])


def render(jobs: Sequence[JobSnapshot], estimates: Sequence[EstimateResult]) -> Report:
    """One line per job in provider order, or the sentinel line when idle."""
    if len(jobs) != len(estimates):
        raise ValueError(f"Got {len(jobs)} jobs but {len(estimates)} estimates")

    if not jobs:
        return Report(lines=(NO_JOBS_TEXT,))

    lines: List[str] = [render_line(j, e) for j, e in zip(jobs, estimates)]

    # trim the block as a whole, like the final text
    text = "\n".join(lines).strip()
    return Report(lines=tuple(text.split("\n")))


def build_report(jobs: Sequence[JobSnapshot], isolate_bad_records: bool = False) -> Report:
    return render(jobs, estimate_all(jobs, isolate_bad_records=isolate_bad_records))
