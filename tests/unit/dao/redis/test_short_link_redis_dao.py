"""Unit tests for the ShortLinkRedisDAO

Test coverage includes:

1. Insertion behavior
   - Ensures records are written with SET NX and guessable records are indexed for reuse.
   - Ensures unguessable records are never indexed.
   - Confirms a taken path raises ShortLinkAlreadyExistsError.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
   - Confirms Redis connection errors and timeouts raise DataStoreError.

2. Retrieval behavior
   - Ensures stored records are decoded into ShortLinkModel.
   - Confirms missing keys raise ShortLinkNotFoundError.
   - Confirms corrupted records raise DataStoreError.

3. Reuse lookup
   - Ensures the reuse index resolves to a matching guessable record.
   - Confirms missing, stale, mismatching or unguessable entries raise ShortLinkNotFoundError.
"""

import re
import json
from unittest.mock import call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from durablelinks.models import ShortLinkModel
from durablelinks.dao.exceptions import DataStoreError, DataStoreTimeoutError, ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from durablelinks.dao.redis import RedisKeySchema, ShortLinkRedisDAO


QUERY = 'link=https%3A%2F%2Fexample.com'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    return ShortLinkRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def keys(app_prefix):
    return RedisKeySchema(prefix=app_prefix)


def stored(query: str = QUERY, unguessable: bool = False) -> str:
    return json.dumps({'query': query, 'unguessable': unguessable})


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_guessable_short_link(dao, redis_client, keys):
    """Ensure guessable records are stored with NX and registered in the reuse index."""
    short_link = ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY)

    assert dao.insert(short_link) is dao

    redis_client.set.assert_has_calls(
        [
            call(keys.link_key('x.link', 'aB3dE9'), stored(), nx=True, ex=None),
            call(keys.reuse_key('x.link', QUERY), 'aB3dE9', nx=True, ex=None),
        ]
    )
    assert redis_client.set.call_count == 2


def test_insert_unguessable_short_link_is_not_indexed(dao, redis_client, keys):
    """Ensure unguessable records are never offered for reuse."""
    short_link = ShortLinkModel(host='x.link', path='aB3dE9fG1h', query=QUERY, unguessable=True)

    dao.insert(short_link)

    redis_client.set.assert_called_once_with(keys.link_key('x.link', 'aB3dE9fG1h'), stored(unguessable=True), nx=True, ex=None)


def test_insert_applies_ttl(redis_client, app_prefix, keys):
    """Ensure a configured retention period is applied to both keys."""
    dao = ShortLinkRedisDAO(redis_client=redis_client, prefix=app_prefix, ttl=3600)

    dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY))

    for _, kwargs in redis_client.set.call_args_list:
        assert kwargs == {'nx': True, 'ex': 3600}


def test_insert_short_link_which_already_exists(dao, redis_client):
    """Ensure a taken (host, path) raises ShortLinkAlreadyExistsError and writes nothing else."""
    redis_client.set.return_value = None

    with pytest.raises(ShortLinkAlreadyExistsError, match=re.escape("Short link 'x.link/aB3dE9' already exists.")):
        dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY))
    assert redis_client.set.call_count == 1


def test_insert_short_link_with_invalid_type(dao):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://x.link/notamodel')


def test_insert_short_link_with_redis_connection_error(dao, redis_client):
    """Ensure Redis connection errors during insert raise DataStoreError."""
    redis_client.set.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY))


def test_insert_short_link_with_redis_timeout(dao, redis_client):
    """Ensure Redis timeouts during insert raise DataStoreTimeoutError."""
    redis_client.set.side_effect = redis.exceptions.TimeoutError('Timeout reading from socket')

    with pytest.raises(DataStoreTimeoutError, match='redis.test:6379/0 timed out'):
        dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY))


# -------------------------------
# 2. Retrieval behavior
# -------------------------------


def test_get_short_link(dao, redis_client, keys):
    """Ensure stored records are returned as ShortLinkModel."""
    redis_client.get.return_value = stored(unguessable=True)

    record = dao.get('x.link', 'aB3dE9')

    redis_client.get.assert_called_once_with(keys.link_key('x.link', 'aB3dE9'))
    assert record == ShortLinkModel(host='x.link', path='aB3dE9', query=QUERY, unguessable=True)


def test_get_short_link_with_empty_query(dao, redis_client):
    redis_client.get.return_value = stored(query='')

    assert dao.get('x.link', 'aB3dE9').query == ''


def test_get_short_link_not_found(dao, redis_client):
    """Ensure missing records raise ShortLinkNotFoundError."""
    redis_client.get.return_value = None

    with pytest.raises(ShortLinkNotFoundError, match=re.escape("Short link 'x.link/missing' not found.")):
        dao.get('x.link', 'missing')


def test_get_corrupted_short_link(dao, redis_client):
    """Ensure undecodable records raise DataStoreError."""
    redis_client.get.return_value = 'not json'

    with pytest.raises(DataStoreError, match='corrupted'):
        dao.get('x.link', 'aB3dE9')


def test_get_short_link_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get('x.link', 123)


def test_get_short_link_with_redis_connection_error(dao, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.get('x.link', 'aB3dE9')


# -------------------------------
# 3. Reuse lookup
# -------------------------------


def test_find_guessable(dao, redis_client, keys):
    """Ensure the reuse index resolves to the matching guessable record's path."""
    values = {
        keys.reuse_key('x.link', QUERY): 'aB3dE9',
        keys.link_key('x.link', 'aB3dE9'): stored(),
    }
    redis_client.get.side_effect = values.get

    assert dao.find_guessable('x.link', QUERY) == 'aB3dE9'


def test_find_guessable_decodes_bytes(dao, redis_client, keys):
    values = {
        keys.reuse_key('x.link', QUERY): b'aB3dE9',
        keys.link_key('x.link', 'aB3dE9'): stored().encode(),
    }
    redis_client.get.side_effect = values.get

    assert dao.find_guessable('x.link', QUERY) == 'aB3dE9'


def test_find_guessable_without_index_entry(dao, redis_client):
    redis_client.get.return_value = None

    with pytest.raises(ShortLinkNotFoundError):
        dao.find_guessable('x.link', QUERY)


def test_find_guessable_with_stale_index_entry(dao, redis_client, keys):
    """Ensure an index entry whose record expired doesn't match."""
    redis_client.get.side_effect = {keys.reuse_key('x.link', QUERY): 'aB3dE9'}.get

    with pytest.raises(ShortLinkNotFoundError):
        dao.find_guessable('x.link', QUERY)


@pytest.mark.parametrize(
    'record',
    [
        stored(query='link=https%3A%2F%2Fother.com'),
        stored(unguessable=True),
    ],
)
def test_find_guessable_rejects_mismatching_records(dao, redis_client, keys, record):
    """Ensure digest collisions and unguessable records are never reused."""
    values = {
        keys.reuse_key('x.link', QUERY): 'aB3dE9',
        keys.link_key('x.link', 'aB3dE9'): record,
    }
    redis_client.get.side_effect = values.get

    with pytest.raises(ShortLinkNotFoundError):
        dao.find_guessable('x.link', QUERY)


def test_find_guessable_with_redis_connection_error(dao, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        dao.find_guessable('x.link', QUERY)
