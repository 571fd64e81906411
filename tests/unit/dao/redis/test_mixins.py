"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures correct initialization with or without a Redis client.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Failed pings are retried a bounded number of times with a fixed delay.
       - Exhausted retries raise DataStoreError (or return False on request).
"""

from unittest.mock import MagicMock, call, patch

import pytest
import redis

from durablelinks.dao.exceptions import DataStoreError
from durablelinks.dao.redis import RedisKeySchema
from durablelinks.dao.redis.mixins import RedisClientMixin


@pytest.fixture(autouse=True)
def sleep():
    with patch('durablelinks.dao.redis.mixins.time.sleep') as mock_sleep:
        yield mock_sleep


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_init_with_existing_client(redis_client, app_prefix):
    mixin = RedisClientMixin(redis_client=redis_client, prefix=app_prefix)

    assert mixin.redis is redis_client
    assert isinstance(mixin.keys, RedisKeySchema)
    assert mixin.keys.prefix == app_prefix
    redis_client.ping.assert_called_once()


def test_init_creates_client_from_parameters(redis_client):
    with patch('durablelinks.dao.redis.mixins.redis.Redis', return_value=redis_client) as mock_redis:
        mixin = RedisClientMixin(
            redis_host='redis.internal',
            redis_port='6380',
            redis_db='2',
            redis_username='user',
            redis_password='secret',
            redis_socket_timeout=1.5,
        )

    mock_redis.assert_called_once_with(
        host='redis.internal',
        port=6380,
        db=2,
        decode_responses=True,
        username='user',
        password='secret',
        socket_timeout=1.5,
    )
    assert mixin.redis is redis_client


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_retries_until_redis_answers(redis_client, sleep):
    redis_client.ping.side_effect = [redis.exceptions.ConnectionError('down'), True]

    mixin = RedisClientMixin(redis_client=redis_client, redis_connect_attempts=3, redis_connect_retry_delay=0.5)

    assert redis_client.ping.call_count == 2
    sleep.assert_called_once_with(0.5)

    redis_client.ping.side_effect = None
    redis_client.ping.return_value = True
    assert mixin._healthcheck() is True


def test_healthcheck_gives_up_after_bounded_attempts(redis_client, sleep):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('down')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0 after 3 attempts."):
        RedisClientMixin(redis_client=redis_client, redis_connect_retry_delay=2.0)

    assert redis_client.ping.call_count == 3
    assert sleep.call_args_list == [call(2.0), call(2.0)]


def test_healthcheck_retries_timeouts(redis_client):
    redis_client.ping.side_effect = [redis.exceptions.TimeoutError('slow'), True]

    RedisClientMixin(redis_client=redis_client)

    assert redis_client.ping.call_count == 2


def test_healthcheck_without_raising(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, redis_connect_attempts=1)
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('down')

    assert mixin._healthcheck(raise_error=False) is False


def test_healthcheck_attempts_are_at_least_one(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, redis_connect_attempts=0)

    assert mixin.connect_attempts == 1
    redis_client.ping.assert_called_once()


def test_healthcheck_with_unexpected_client_error():
    client = MagicMock(spec=redis.Redis)
    client.ping.side_effect = RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        RedisClientMixin(redis_client=client)
