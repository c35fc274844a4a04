# ======================================================================
#  File......: app_tray.py
#  Purpose...: Windows tray icon (Open Status/Refresh/Pause/Resume/Exit).
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

from typing import Callable

import pystray
from PIL import Image, ImageDraw

from agent import PollScheduler
from settings import VERSION


def _make_icon() -> Image.Image:
    """Generated purple disk icon."""
    img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    d.ellipse((4, 4, 60, 60), fill=(112, 48, 160, 255), outline=(255, 255, 255, 255), width=3)
    d.text((20, 24), "SR", fill=(255, 255, 255, 255))
    return img


def run_tray(
    scheduler: PollScheduler,
    on_open: Callable[[], None],
    on_exit: Callable[[], None],
) -> None:
    """Blocks until Exit is chosen."""

    def open_status(icon, item):
        on_open()

    def refresh(icon, item):
        scheduler.refresh()

    def pause(icon, item):
        scheduler.pause()

    def resume(icon, item):
        scheduler.resume()

    def exit_app(icon, item):
        scheduler.stop()
        on_exit()
        icon.stop()

    title = f"Storage Spaces Repair Monitor {VERSION}"
    icon = pystray.Icon(
        "StorageSpacesMonitor",
        _make_icon(),
        title,
        menu=pystray.Menu(
            # default item = left click
            pystray.MenuItem("Open Status", open_status, default=True),
            pystray.MenuItem("Refresh Now", refresh),
            pystray.MenuItem("Pause", pause, enabled=lambda item: not scheduler.pause_flag.is_set()),
            pystray.MenuItem("Resume", resume, enabled=lambda item: scheduler.pause_flag.is_set()),
            pystray.MenuItem("Exit", exit_app),
        )
    )

    icon.run()
