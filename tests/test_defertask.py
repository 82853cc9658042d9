import threading
import time

from naza.defertask import DeferTaskThread, go


def test_defer_task_thread_runs_all():
    d = DeferTaskThread()
    results = []
    lock = threading.Lock()

    def task(value):
        with lock:
            results.append(value)

    timers = [d.go(i, task, i) for i in range(0, 300, 50)]
    assert len(timers) == 6
    for timer in timers:
        timer.join(timeout=5)
    assert all(not timer.is_alive() for timer in timers)
    assert sorted(results) == list(range(0, 300, 50))


def test_delay_is_respected():
    done = []
    start = time.monotonic()
    timer = go(50, lambda: done.append(time.monotonic()))
    timer.join(timeout=5)
    assert not timer.is_alive()
    assert len(done) == 1
    assert done[0] - start >= 0.045


def test_arguments_are_passed():
    received = []
    timer = go(0, lambda *args: received.append(args), 1, "two")
    timer.join(timeout=5)
    assert received == [(1, "two")]