import pytest

from settings import MonitorSettings, ensure_config, load_settings


def test_defaults_when_file_missing(tmp_path):
    settings = load_settings(str(tmp_path / "missing.ini"))
    assert settings == MonitorSettings()
    assert settings.poll_interval_sec == 5.0
    assert settings.job_class == "MSFT_StorageJob"


def test_ensure_config_writes_defaults_once(tmp_path):
    path = tmp_path / "monitor_config.ini"
    ensure_config(str(path))
    assert "[monitor]" in path.read_text()
    assert load_settings(str(path)) == MonitorSettings()

    path.write_text("[monitor]\npoll_interval_ms = 1000\n")
    ensure_config(str(path))
    assert load_settings(str(path)).poll_interval_ms == 1000


def test_overrides(tmp_path):
    path = tmp_path / "monitor_config.ini"
    path.write_text(
        "[monitor]\n"
        "poll_interval_ms = 30000\n"
        "job_class = MSFT_StorageJob\n"
        "fetch_timeout_sec = 2.5\n"
        "isolate_bad_records = yes\n"
        "port = 6000\n"
        "log_level = debug\n"
    )
    s = load_settings(str(path))
    assert s.poll_interval_sec == 30.0
    assert s.fetch_timeout_sec == 2.5
    assert s.isolate_bad_records is True
    assert s.port == 6000
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("body, key", [
    ("poll_interval_ms = soon", "poll_interval_ms"),
    ("poll_interval_ms = 0", "poll_interval_ms"),
    ("isolate_bad_records = maybe", "isolate_bad_records"),
    ("log_level = LOUD", "log_level"),
    ("job_class =", "job_class"),
])
def test_invalid_values(tmp_path, body, key):
    path = tmp_path / "monitor_config.ini"
    path.write_text(f"[monitor]\n{body}\n")
    with pytest.raises(ValueError):
        load_settings(str(path))
