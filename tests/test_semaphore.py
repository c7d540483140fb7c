import threading

import pytest

from kieserver.semaphore import DEFAULT_CONCURRENCY, MAX_CONCURRENCY, Semaphore


def test_default_capacity():
    assert Semaphore().capacity == DEFAULT_CONCURRENCY == 500


def test_capacity_is_capped():
    assert MAX_CONCURRENCY == 65535
    assert Semaphore(MAX_CONCURRENCY + 10).capacity == MAX_CONCURRENCY


def test_acquire_and_release_track_tickets():
    sem = Semaphore(2)
    sem.acquire()
    sem.acquire()
    assert sem.available == 0
    assert sem.try_acquire() is False
    sem.release()
    assert sem.available == 1
    assert sem.try_acquire() is True


def test_context_manager_returns_ticket():
    sem = Semaphore(3)
    with sem:
        assert sem.available == 2
    assert sem.available == 3


def test_acquire_waits_for_release():
    sem = Semaphore(1)
    sem.acquire()
    done = threading.Event()

    def worker():
        sem.acquire()
        done.set()

    thread = threading.Thread(target=worker)
    thread.start()
    assert not done.wait(0.1)
    sem.release()
    assert done.wait(2)
    thread.join(2)
    assert sem.available == 0


def test_release_waits_when_full():
    sem = Semaphore(1)
    thread = threading.Thread(target=sem.release)
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()
    sem.acquire()
    thread.join(2)
    assert not thread.is_alive()
    assert sem.available == 1


def test_negative_concurrency_rejected():
    with pytest.raises(ValueError):
        Semaphore(-1)