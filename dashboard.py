# ======================================================================
#  File......: dashboard.py
#  Purpose...: Bokeh status view (report text panel that grows to fit).
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

from datetime import datetime
from typing import Callable, Tuple

from bokeh.document import Document
from bokeh.layouts import column
from bokeh.models import Div, PreText

from agent import PollScheduler
from models import Report
from presentation import deliver_report, text_metrics
from settings import VERSION


# Consolas 10pt
CHAR_WIDTH_PX = 8
LINE_HEIGHT_PX = 17

# scroll bar, borders
PAD_WIDTH_PX = 40
PAD_HEIGHT_PX = 20

MIN_WIDTH_PX = 20
MIN_HEIGHT_PX = 20


def size_for_text(text: str) -> Tuple[int, int]:
    chars, lines = text_metrics(text)
    width = chars * CHAR_WIDTH_PX + PAD_WIDTH_PX
    height = lines * LINE_HEIGHT_PX + PAD_HEIGHT_PX
    return max(width, MIN_WIDTH_PX), max(height, MIN_HEIGHT_PX)


class BokehReportSink:
    """Presentation sink backed by one Bokeh document."""

    def __init__(self, doc: Document, panel: PreText, meta: Div, poll_interval_sec: float):
        self.doc = doc
        self.panel = panel
        self.meta = meta
        self.poll_interval_sec = poll_interval_sec

    def can_update_directly(self) -> bool:
        # once served, the document belongs to the server's IO loop
        return self.doc.session_context is None

    def hand_off(self, callback: Callable[[], None]) -> None:
        self.doc.add_next_tick_callback(callback)

    def show(self, report: Report) -> None:
        text = report.text
        self.panel.text = text

        # grow only, like a window that keeps its largest size
        width, height = size_for_text(text)
        if width > (self.panel.width or 0):
            self.panel.width = width
        if height > (self.panel.height or 0):
            self.panel.height = height

        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        state = "error" if report.is_error else "ok"
        self.meta.text = (
            f"<b>Last refresh:</b> {ts} &nbsp; | &nbsp; "
            f"<b>Poll:</b> {self.poll_interval_sec:g}s &nbsp; | &nbsp; "
            f"<b>Status:</b> {state}"
        )


def build_document(doc: Document, scheduler: PollScheduler) -> BokehReportSink:
    """Populate a document with the status view and attach it to the scheduler."""
    title = Div(text=f"<h3>Storage Spaces Repair Status {VERSION}</h3>")
    meta = Div(text="")
    panel = PreText(
        text="",
        width=MIN_WIDTH_PX,
        height=MIN_HEIGHT_PX,
        styles={"font-family": "Consolas, monospace", "font-size": "10pt"},
    )

    sink = BokehReportSink(doc, panel, meta, scheduler.poll_interval_sec)

    doc.add_root(column(title, meta, panel))
    doc.title = f"Storage Spaces Repair Status {VERSION}"

    unsubscribe = scheduler.subscribe(lambda report: deliver_report(sink, report))
    doc.on_session_destroyed(lambda session_context: unsubscribe())
    return sink
