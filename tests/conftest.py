"""
Pytest configuration for the storage monitor tests.
"""

import os
import sys
from types import SimpleNamespace

import pytest

# Ensure project root is importable
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from models import JobSnapshot  # noqa: E402


def dmtf(days=0, hours=0, minutes=0, seconds=0, micro=0, trailer="000"):
    """Build a WMI interval string, e.g. 00000000001230.000000:000."""
    return f"{days:08d}{hours:02d}{minutes:02d}{seconds:02d}.{micro:06d}:{trailer}"


@pytest.fixture
def make_job():
    def _make(name="Volume1", percent="50", processed="500", total="1000", elapsed=None):
        return JobSnapshot(
            name=name,
            percent_complete=percent,
            bytes_processed=processed,
            bytes_total=total,
            elapsed_raw=dmtf(seconds=10) if elapsed is None else elapsed,
        )
    return _make


@pytest.fixture
def wmi_record():
    """Fake WMI MSFT_StorageJob object (attribute access, None for nulls)."""
    def _make(**fields):
        base = dict(Name=None, PercentComplete=None, BytesProcessed=None, BytesTotal=None, ElapsedTime=None)
        base.update(fields)
        return SimpleNamespace(**base)
    return _make
