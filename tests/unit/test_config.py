import importlib

import pytest

from app.config import config as cfg


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 7),
        ("", 7),
        ("12", 12),
        ("abc", 7),
        ("0", 7),
        ("-3", 7),
    ],
)
def test_get_int(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SPINHUB_TEST_INT", raising=False)
    else:
        monkeypatch.setenv("SPINHUB_TEST_INT", raw)
    assert cfg.get_int("SPINHUB_TEST_INT", 7) == expected


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MACHINE_COUNT", "5")
    monkeypatch.setenv("DEFAULT_DURATION", "not-a-number")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    try:
        reloaded = importlib.reload(cfg)
        assert reloaded.MACHINE_COUNT == 5
        assert reloaded.DEFAULT_DURATION == 150
        assert reloaded.LOG_LEVEL == "DEBUG"
    finally:
        monkeypatch.undo()
        importlib.reload(cfg)
