import datetime as dt
import threading
import time

from ferretcore.ctxutil import with_delay


def test_not_cancelled_until_done():
    done = threading.Event()
    ctx, cancel = with_delay(done, 0.01)
    try:
        assert ctx.wait(0.1) is False
    finally:
        cancel()


def test_cancelled_after_done_and_delay():
    done = threading.Event()
    delay = 0.3
    ctx, cancel = with_delay(done, delay)
    start = time.monotonic()
    done.set()
    assert ctx.is_set() is False
    assert ctx.wait(5) is True
    assert time.monotonic() - start >= delay - 0.05
    cancel()


def test_cancel_sets_immediately():
    done = threading.Event()
    ctx, cancel = with_delay(done, 10)
    cancel()
    assert ctx.is_set() is True
    assert done.is_set() is False


def test_cancel_during_delay_ends_early():
    done = threading.Event()
    delay = 10
    ctx, cancel = with_delay(done, delay)
    done.set()
    time.sleep(0.05)
    start = time.monotonic()
    cancel()
    assert ctx.wait(1) is True
    assert time.monotonic() - start < delay


def test_accepts_timedelta():
    done = threading.Event()
    ctx, cancel = with_delay(done, dt.timedelta(milliseconds=20))
    done.set()
    assert ctx.wait(5) is True
    cancel()