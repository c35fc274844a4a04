# ======================================================================
#  File......: errors.py
#  Purpose...: Exceptions raised by the monitoring pipeline.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations


class MonitorError(Exception):
    """Base class for failures that end a poll cycle."""


class ProviderError(MonitorError):
    """The storage job provider could not be queried."""


class FormatError(MonitorError, ValueError):
    """A structured interval or integer field could not be parsed."""
