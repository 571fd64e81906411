"""Unit tests for handle_redis_connection_error decorator.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Connection error handling
       - Ensures Redis connection errors are converted into DataStoreError.
       - Ensures Redis timeouts are converted into DataStoreTimeoutError.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

from unittest.mock import MagicMock

import pytest
import redis

from durablelinks.dao.redis.helpers import handle_redis_connection_error
from durablelinks.dao.exceptions import DataStoreError, DataStoreTimeoutError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}

    @handle_redis_connection_error
    def fetch(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().fetch() == 'OK'


# -------------------------------
# 2. Connection error handling
# -------------------------------


def test_decorator_transforms_redis_connection_error():
    dao = DummyDAO(redis.exceptions.ConnectionError('Cannot connect'))

    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        dao.fetch()
    assert not isinstance(exc_info.value, DataStoreTimeoutError)
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_decorator_transforms_redis_timeout_error():
    dao = DummyDAO(redis.exceptions.TimeoutError('Timeout reading from socket'))

    with pytest.raises(DataStoreTimeoutError, match='Redis at localhost:6379/0 timed out.'):
        dao.fetch()


def test_decorator_leaves_other_errors_alone():
    dao = DummyDAO(ValueError('boom'))

    with pytest.raises(ValueError, match='boom'):
        dao.fetch()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
