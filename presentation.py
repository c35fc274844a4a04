# ======================================================================
#  File......: presentation.py
#  Purpose...: Contract for report sinks + thread-safe report delivery.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

from typing import Callable, Protocol, Tuple

from models import Report


class PresentationSink(Protocol):
    """Something that displays a Report and owns its own UI thread/loop."""

    def can_update_directly(self) -> bool:
        ...

    def hand_off(self, callback: Callable[[], None]) -> None:
        ...

    def show(self, report: Report) -> None:
        ...


def deliver_report(sink: PresentationSink, report: Report) -> None:
    """Show the report, going through the sink's hand-off when required."""
    if sink.can_update_directly():
        sink.show(report)
    else:
        sink.hand_off(lambda: sink.show(report))


def text_metrics(text: str) -> Tuple[int, int]:
    """(widest line in characters, number of lines)."""
    lines = text.splitlines() or [""]
    return max(len(line) for line in lines), len(lines)
