import threading
import time

import pytest

from userbench.gate import PermitGate, available_processors


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_default_capacity_is_processor_count():
    gate = PermitGate()
    assert gate.capacity == available_processors()
    assert gate.capacity >= 1


@pytest.mark.parametrize("capacity", [0, -3])
def test_rejects_non_positive_capacity(capacity):
    with pytest.raises(ValueError):
        PermitGate(capacity)


def test_acquire_and_release_track_usage():
    gate = PermitGate(3)
    assert gate.acquire()
    assert gate.acquire(weight=2)
    assert gate.in_use == 3
    assert gate.peak == 3
    gate.release(weight=2)
    gate.release()
    assert gate.in_use == 0
    assert gate.peak == 3


def test_acquire_times_out_when_full():
    gate = PermitGate(1)
    gate.acquire()
    t0 = time.monotonic()
    assert gate.acquire(timeout=0.05) is False
    assert time.monotonic() - t0 >= 0.04
    assert gate.waiting == 0
    assert gate.in_use == 1


def test_zero_timeout_succeeds_when_free():
    gate = PermitGate(1)
    assert gate.acquire(timeout=0) is True


def test_weight_larger_than_capacity_is_rejected():
    gate = PermitGate(2)
    with pytest.raises(ValueError):
        gate.acquire(weight=3)


def test_over_release_is_rejected():
    gate = PermitGate(2)
    with pytest.raises(ValueError):
        gate.release()
    gate.acquire()
    with pytest.raises(ValueError):
        gate.release(weight=2)


def test_permit_releases_on_exception():
    gate = PermitGate(1)
    with pytest.raises(RuntimeError):
        with gate.permit():
            assert gate.in_use == 1
            raise RuntimeError("boom")
    assert gate.in_use == 0


def test_limit_wraps_and_preserves_name():
    gate = PermitGate(1)
    seen = []

    @gate.limit
    def view(x):
        seen.append(gate.in_use)
        return x * 2

    assert view(4) == 8
    assert seen == [1]
    assert view.__name__ == "view"
    assert gate.in_use == 0


def test_blocked_waiter_proceeds_after_release():
    gate = PermitGate(1)
    gate.acquire()
    acquired = threading.Event()

    def waiter():
        gate.acquire()
        acquired.set()
        gate.release()

    t = threading.Thread(target=waiter)
    t.start()
    assert _wait_until(lambda: gate.waiting == 1)
    assert not acquired.is_set()
    gate.release()
    assert acquired.wait(5)
    t.join(5)
    assert gate.in_use == 0


def test_waiters_admitted_in_arrival_order():
    gate = PermitGate(1)
    gate.acquire()
    order = []

    def waiter(n):
        with gate.permit():
            order.append(n)

    threads = []
    for n in range(3):
        t = threading.Thread(target=waiter, args=(n,))
        t.start()
        threads.append(t)
        assert _wait_until(lambda: gate.waiting == n + 1)

    gate.release()
    for t in threads:
        t.join(5)
    assert order == [0, 1, 2]


def test_heavy_head_waiter_blocks_lighter_ones():
    gate = PermitGate(2)
    gate.acquire()
    got = []

    def take(weight, label):
        gate.acquire(weight=weight)
        got.append(label)

    heavy = threading.Thread(target=take, args=(2, "heavy"))
    heavy.start()
    assert _wait_until(lambda: gate.waiting == 1)
    light = threading.Thread(target=take, args=(1, "light"))
    light.start()
    assert _wait_until(lambda: gate.waiting == 2)

    # A permit is free but the heavy waiter is first in line
    time.sleep(0.05)
    assert got == []

    gate.release()
    heavy.join(5)
    assert got == ["heavy"]
    gate.release(weight=2)
    light.join(5)
    assert got == ["heavy", "light"]


def test_concurrency_never_exceeds_capacity():
    gate = PermitGate(3)
    lock = threading.Lock()
    active = 0
    max_active = 0

    def work():
        nonlocal active, max_active
        with gate.permit():
            with lock:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.01)
            with lock:
                active -= 1

    threads = [threading.Thread(target=work) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10)

    assert max_active <= 3
    assert gate.peak <= 3
    assert gate.in_use == 0
