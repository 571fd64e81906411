"""Unit tests for RedisKeySchema

Test coverage includes:
    1. Key layout with and without a prefix.
    2. Reuse keys are stable per (host, query), differ across hosts and queries,
       and never share the link key namespace.
    3. Invalid prefix types raise TypeError.
"""

import pytest
import xxhash

from durablelinks.dao.redis import RedisKeySchema


QUERY = 'link=https%3A%2F%2Fexample.com'


def test_link_key_with_prefix():
    keys = RedisKeySchema(prefix='durablelinks:dev')
    assert keys.link_key('x.link', 'aB3dE9') == 'durablelinks:dev:links:x.link:aB3dE9'


def test_link_key_without_prefix():
    keys = RedisKeySchema()
    assert keys.link_key('x.link', 'aB3dE9') == 'links:x.link:aB3dE9'


def test_reuse_key_layout():
    key = RedisKeySchema(prefix='app:test').reuse_key('x.link', QUERY)

    prefix, _, digest = key.rpartition(':')
    assert prefix == 'app:test:reuse:x.link'
    assert len(digest) == 32
    assert all(c in '0123456789abcdef' for c in digest)


def test_reuse_key_is_deterministic():
    assert RedisKeySchema().reuse_key('x.link', QUERY) == RedisKeySchema().reuse_key('x.link', QUERY)


@pytest.mark.parametrize(
    'host, query',
    [
        ('y.link', QUERY),
        ('x.link', 'link=https%3A%2F%2Fexample.org'),
    ],
)
def test_reuse_key_differs(host, query):
    assert RedisKeySchema().reuse_key(host, query) != RedisKeySchema().reuse_key('x.link', QUERY)


@pytest.mark.parametrize('prefix', [123, 4.5, ['app'], object()])
def test_invalid_prefix_type(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)


def test_reuse_key_digests_query_bytes():
    key = RedisKeySchema().reuse_key('x.link', QUERY)

    assert key == f'reuse:x.link:{xxhash.xxh128_hexdigest(QUERY.encode())}'


def test_reuse_key_is_outside_link_namespace():
    keys = RedisKeySchema(prefix='app:test')
    reuse_key = keys.reuse_key('x.link', QUERY)

    assert not reuse_key.startswith('app:test:links:')
    assert reuse_key != keys.link_key('x.link', reuse_key.rpartition(':')[2])
