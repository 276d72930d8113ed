"""
Tests for LockService (redis client mocked)
"""

import pytest
import redis
from unittest.mock import MagicMock

from app.domain.errors import Conflict
from app.services.lock_service import LockService


@pytest.fixture
def lock():
    svc = LockService(url="redis://localhost:6379/0", ttl_ms=1000, attempts=2)
    svc.redis = MagicMock()
    return svc


def test_acquires_and_releases(lock):
    lock.redis.set.return_value = True
    lock.redis.eval.return_value = 1

    with lock.cart_lock(7):
        pass

    kwargs = lock.redis.set.call_args.kwargs
    assert kwargs["name"] == "cart:7:lock"
    assert kwargs["nx"] is True
    assert kwargs["px"] == 1000
    # zwalnia ten sam owner ktory zalozyl lock
    eval_args = lock.redis.eval.call_args.args
    assert eval_args[2] == "cart:7:lock"
    assert eval_args[3] == kwargs["value"]


def test_busy_lock_raises_conflict(lock):
    lock.redis.set.return_value = None

    with pytest.raises(Conflict):
        with lock.cart_lock(7):
            pytest.fail("body must not run without the lock")

    assert lock.redis.set.call_count == 2
    lock.redis.eval.assert_not_called()


def test_released_when_body_fails(lock):
    lock.redis.set.return_value = True
    lock.redis.eval.return_value = 1

    with pytest.raises(RuntimeError):
        with lock.cart_lock(7):
            raise RuntimeError("boom")

    lock.redis.eval.assert_called_once()


def test_retries_until_free(lock):
    lock.redis.set.side_effect = [None, True]
    lock.redis.eval.return_value = 1

    with lock.cart_lock(7):
        pass

    assert lock.redis.set.call_count == 2


def test_release_error_does_not_fail_committed_work(lock):
    lock.redis.set.return_value = True
    lock.redis.eval.side_effect = redis.ConnectionError("connection reset")
    done = []

    with lock.cart_lock(7):
        done.append("committed")

    assert done == ["committed"]
    # redis_retry: 3 proby zwolnienia, potem lock wygasa sam
    assert lock.redis.eval.call_count == 3


def test_release_error_keeps_body_exception(lock):
    lock.redis.set.return_value = True
    lock.redis.eval.side_effect = redis.ConnectionError("connection reset")

    with pytest.raises(RuntimeError):
        with lock.cart_lock(7):
            raise RuntimeError("boom")
