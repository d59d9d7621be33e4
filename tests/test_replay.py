import threading

import pytest

from zkschnorr.exceptions import ReplayDetectedError, ReplayWindowFullError
from zkschnorr.replay import ReplayWindow


def test_replay_detected(clock):
    window = ReplayWindow(window=60, clock=clock)
    window.check_and_add(b"r1")
    window.check_and_add(b"r2")
    with pytest.raises(ReplayDetectedError):
        window.check_and_add(b"r1")
    assert b"r1" in window
    assert len(window) == 2


def test_entries_expire(clock):
    window = ReplayWindow(window=60, clock=clock)
    window.check_and_add(b"r1")
    clock.advance(30)
    window.check_and_add(b"r2")
    clock.advance(31)
    assert b"r1" not in window
    assert b"r2" in window
    window.check_and_add(b"r1")
    assert len(window) == 2
    clock.advance(60)
    assert len(window) == 0


def test_max_entries(clock):
    window = ReplayWindow(window=60, max_entries=2, clock=clock)
    window.check_and_add(b"r1")
    window.check_and_add(b"r2")
    with pytest.raises(ReplayWindowFullError):
        window.check_and_add(b"r3")
    assert b"r3" not in window
    with pytest.raises(ReplayDetectedError):
        window.check_and_add(b"r1")
    assert len(window) == 2


def test_full_window_frees_expired_entries(clock):
    window = ReplayWindow(window=60, max_entries=2, clock=clock)
    window.check_and_add(b"r1")
    clock.advance(30)
    window.check_and_add(b"r2")
    clock.advance(31)
    window.check_and_add(b"r3")
    assert b"r1" not in window
    assert b"r2" in window
    assert b"r3" in window
    with pytest.raises(ReplayWindowFullError):
        window.check_and_add(b"r4")


@pytest.mark.parametrize("kwargs", [{"window": 0}, {"window": -1}, {"max_entries": 0}])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        ReplayWindow(**kwargs)


def test_concurrent_insertions():
    window = ReplayWindow()
    failures = []
    lock = threading.Lock()

    def insert(start):
        for i in range(200):
            try:
                window.check_and_add(b"%d" % (i % 100))
            except ReplayDetectedError:
                with lock:
                    failures.append(i)

    threads = [threading.Thread(target=insert, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # 800 attempts on 100 distinct keys: exactly 100 succeed.
    assert len(failures) == 700
    assert len(window) == 100
