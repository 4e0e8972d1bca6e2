#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

import logging

import pytest

from redirector.config import Config
from redirector.glogging import Logger


@pytest.fixture
def restore_logger():
    yield
    # drop any file handler left behind by a test
    Logger(Config())


def redirector_handlers(log):
    return [h for h in log.error_log.handlers
            if getattr(h, "_redirector", False)]


def test_default_setup(restore_logger):
    log = Logger(Config())
    assert log.error_log.name == "redirector.error"
    assert log.error_log.level == logging.INFO
    handlers = redirector_handlers(log)
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)


@pytest.mark.parametrize("name, level", [
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    ("warning", logging.WARNING),
    ("error", logging.ERROR),
    ("critical", logging.CRITICAL),
    ("bogus", logging.INFO),
])
def test_loglevel(restore_logger, name, level):
    cfg = Config()
    cfg.set("loglevel", name)
    log = Logger(cfg)
    assert log.error_log.level == level


def test_setup_replaces_handler(restore_logger):
    cfg = Config()
    Logger(cfg)
    log = Logger(cfg)
    assert len(redirector_handlers(log)) == 1


def test_errorlog_file(restore_logger, tmp_path):
    path = tmp_path / "error.log"
    cfg = Config()
    cfg.set("errorlog", str(path))
    log = Logger(cfg)
    log.info("redirect %s => %s", "a.com", "b.com")
    log.debug("not shown")
    log.log("warning", "careful")

    content = path.read_text()
    assert "[INFO] redirect a.com => b.com" in content
    assert "[WARNING] careful" in content
    assert "not shown" not in content


def test_errorlog_not_writable(restore_logger, tmp_path):
    cfg = Config()
    cfg.set("errorlog", str(tmp_path / "missing" / "error.log"))
    with pytest.raises(RuntimeError):
        Logger(cfg)
