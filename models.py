# ======================================================================
#  File......: models.py
#  Purpose...: Dataclasses for job snapshots, estimates and reports.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class JobSnapshot:
    name: str = ""
    percent_complete: str = ""
    bytes_processed: str = "0"
    bytes_total: str = "0"
    elapsed_raw: str = ""


@dataclass(frozen=True)
class EstimateResult:
    processed: str
    total: str
    elapsed: str
    eta: str = "unknown"
    error: str = ""


@dataclass(frozen=True)
class Report:
    lines: Tuple[str, ...]
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines).strip()

    @classmethod
    def error(cls, message: str) -> "Report":
        return cls(lines=(f"Error: {message}",), is_error=True)
