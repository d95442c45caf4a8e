import logging

import pytest

from ferretcore.logsetup import setup


def _ours(root):
    return [h for h in root.handlers if type(h).__module__ == "ferretcore.logsetup"]


@pytest.fixture(autouse=True)
def restore_root():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in _ours(root):
        root.removeHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_sets_level_by_name():
    root = setup("debug")
    assert root is logging.getLogger()
    assert root.level == logging.DEBUG


def test_warn_alias():
    assert setup("warn").level == logging.WARNING


def test_sets_level_by_number():
    assert setup(logging.ERROR).level == logging.ERROR


def test_repeated_setup_replaces_handler():
    root = setup("info")
    setup("debug")
    assert len(_ours(root)) == 1


def test_invalid_level():
    with pytest.raises(ValueError):
        setup("verbose")


def test_messages_filtered_by_level(capsys):
    setup(logging.WARNING)
    log = logging.getLogger("ferretcore.test")
    log.info("quiet-message")
    log.warning("loud-message")
    err = capsys.readouterr().err
    assert "loud-message" in err
    assert "WARNING" in err
    assert "quiet-message" not in err