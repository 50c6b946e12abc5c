import logging

from shelfkit._logging import NoopLogger, resolve_logger


def test_resolve_logger_default_noop():
    lg = resolve_logger()
    assert isinstance(lg, NoopLogger)
    # Should not raise:
    lg.debug("hello")
    lg.warning("world")


def test_resolve_logger_enabled_creates_logger(caplog):
    with caplog.at_level(logging.INFO):
        lg = resolve_logger(enabled=True, name="shelfkit.test")
        lg.info("test message")
    assert any("test message" in rec.message for rec in caplog.records)
    assert lg.propagate is True


def test_resolve_logger_uses_passed_logger():
    custom = logging.getLogger("shelfkit.custom")
    assert resolve_logger(logger=custom, enabled=False) is custom
