import importlib
import sys
from types import SimpleNamespace

import pytest

from errors import ProviderError


class FakeCom:
    def __init__(self):
        self.calls = []

    def CoInitialize(self):
        self.calls.append("init")

    def CoUninitialize(self):
        self.calls.append("uninit")


@pytest.fixture
def connector(monkeypatch):
    """storage_connector imported against fake pythoncom / wmi modules."""
    com = FakeCom()
    fake_wmi = SimpleNamespace(namespaces=[], conn=None, error=None)

    def WMI(namespace=None):
        fake_wmi.namespaces.append(namespace)
        if fake_wmi.error:
            raise fake_wmi.error
        return fake_wmi.conn

    fake_wmi.WMI = WMI
    monkeypatch.setitem(sys.modules, "pythoncom", com)
    monkeypatch.setitem(sys.modules, "wmi", fake_wmi)
    sys.modules.pop("storage_connector", None)

    module = importlib.import_module("storage_connector")
    yield SimpleNamespace(module=module, com=com, wmi=fake_wmi)

    sys.modules.pop("storage_connector", None)


def test_wmi_connection_opens_namespace(connector):
    connector.wmi.conn = object()
    with connector.module.wmi_connection("root/Test") as conn:
        assert conn is connector.wmi.conn
        assert connector.com.calls == ["init"]
    assert connector.com.calls == ["init", "uninit"]
    assert connector.wmi.namespaces == ["root/Test"]


def test_connect_failure_is_provider_error(connector):
    connector.wmi.error = RuntimeError("Access denied")
    with pytest.raises(ProviderError, match="^Access denied$"):
        with connector.module.wmi_connection():
            pass
    assert connector.com.calls == ["init", "uninit"]
    assert connector.wmi.namespaces == ["root/Microsoft/Windows/Storage"]


def test_query_failure_still_uninitializes(connector):
    def query(wql):
        raise OSError("RPC server is unavailable")

    connector.wmi.conn = SimpleNamespace(query=query)
    fetch = connector.module.make_fetcher("root/Test", "MSFT_StorageJob")
    with pytest.raises(ProviderError, match="RPC server is unavailable"):
        fetch()
    assert connector.com.calls == ["init", "uninit"]


def test_make_fetcher_returns_snapshots(connector):
    seen = []

    def query(wql):
        seen.append(wql)
        return [SimpleNamespace(
            Name="Repair", PercentComplete=10, BytesProcessed="100",
            BytesTotal="1000", ElapsedTime=None,
        )]

    connector.wmi.conn = SimpleNamespace(query=query)
    jobs = connector.module.make_fetcher(job_class="MSFT_StorageJob")()
    assert seen == ["SELECT * FROM MSFT_StorageJob"]
    assert [(j.name, j.percent_complete, j.elapsed_raw) for j in jobs] == [("Repair", "10", "")]
    assert connector.com.calls == ["init", "uninit"]
