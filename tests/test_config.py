import logging

from audit_engine.config import _env_float


def test_env_float_reads_numbers(monkeypatch):
    monkeypatch.setenv("AUDIT_TEST_TIMEOUT", "12.5")
    assert _env_float("AUDIT_TEST_TIMEOUT", 60.0) == 12.5


def test_env_float_defaults_when_unset_or_blank(monkeypatch):
    monkeypatch.delenv("AUDIT_TEST_TIMEOUT", raising=False)
    assert _env_float("AUDIT_TEST_TIMEOUT", 60.0) == 60.0
    monkeypatch.setenv("AUDIT_TEST_TIMEOUT", "  ")
    assert _env_float("AUDIT_TEST_TIMEOUT", 60.0) == 60.0


def test_env_float_warns_on_garbage(monkeypatch, caplog):
    monkeypatch.setenv("AUDIT_TEST_TIMEOUT", "soon")
    with caplog.at_level(logging.WARNING, logger="audit_engine.config"):
        assert _env_float("AUDIT_TEST_TIMEOUT", 60.0) == 60.0
    assert "AUDIT_TEST_TIMEOUT" in caplog.text
