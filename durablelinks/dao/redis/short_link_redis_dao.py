"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO.

Responsibilities:
    - Insert and retrieve short link records keyed by (host, path);
    - Enforce per-host path uniqueness (SET NX);
    - Maintain a reuse index of guessable records keyed by (host, canonical query);
    - Raise appropriate DAO exceptions.

Storage layout:
    <prefix>:links:<host>:<path>                -> {"query": "...", "unguessable": false}
    <prefix>:reuse:<host>:<xxh128(query)>       -> <path>   (guessable records only)

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving ShortLinkModel in a Redis datastore.

Example:
    >>> from durablelinks.models import ShortLinkModel
    >>> from durablelinks.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix='durablelinks:dev')
    >>> dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query='link=https%3A%2F%2Fexample.com'))
    <ShortLinkRedisDAO>

    >>> dao.get('x.link', 'aB3dE9').query
    'link=https%3A%2F%2Fexample.com'

    >>> dao.find_guessable('x.link', 'link=https%3A%2F%2Fexample.com')
    'aB3dE9'
"""

import json

from beartype import beartype

from durablelinks.models import ShortLinkModel
from durablelinks.dao.base import ShortLinkBaseDAO
from durablelinks.dao.redis.mixins import RedisClientMixin
from durablelinks.dao.redis.helpers import handle_redis_connection_error
from durablelinks.dao.exceptions import DataStoreError, ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        ttl (int | None):
            Retention period of new records in seconds. None keeps them forever.

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkRedisDAO:
            Insert a short link record (and its reuse index entry if guessable).
            Raises ShortLinkAlreadyExistsError when the path is taken for the host.
            Raises DataStoreError on connectivity issues with Redis.

        get(host: str, path: str, **kwargs) -> ShortLinkModel:
            Retrieve a short link record.
            Raises ShortLinkNotFoundError when it doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        find_guessable(host: str, query: str, **kwargs) -> str:
            Retrieve the path of a guessable record with the same canonical query.
            Raises ShortLinkNotFoundError when there is none.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, ttl: int | None = None, **kwargs):
        self.ttl = ttl
        super().__init__(*args, **kwargs)

    def __repr__(self) -> str:
        return '<ShortLinkRedisDAO>'

    @handle_redis_connection_error
    @beartype
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkRedisDAO':
        """Insert a short link record into Redis

        The record is written with SET NX, so an existing (host, path) is never
        overwritten. Guessable records are then registered in the reuse index,
        again with SET NX, so the oldest matching path stays the reused one.

        Args:
            short_link (ShortLinkModel):
                The record to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If the path is already taken for this host.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        link_key = self.keys.link_key(short_link.host, short_link.path)
        record = json.dumps({'query': short_link.query, 'unguessable': short_link.unguessable})

        if not self.redis.set(link_key, record, nx=True, ex=self.ttl):
            raise ShortLinkAlreadyExistsError(f"Short link '{short_link.host}/{short_link.path}' already exists.")

        # NOTE: The record and its reuse index entry are written separately. If the
        #       second SET is lost the record still resolves; it just won't be reused.
        if not short_link.unguessable:
            reuse_key = self.keys.reuse_key(short_link.host, short_link.query)
            self.redis.set(reuse_key, short_link.path, nx=True, ex=self.ttl)
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, host: str, path: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link record by host and path

        Raises:
            ShortLinkNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur or the record is corrupted.

        Example:
            >>> dao.get('x.link', 'aB3dE9')
            ShortLinkModel(host='x.link', path='aB3dE9', query='link=...', unguessable=False)
        """
        raw = self.redis.get(self.keys.link_key(host, path))
        if raw is None:
            raise ShortLinkNotFoundError(f"Short link '{host}/{path}' not found.")

        try:
            record = json.loads(raw)
            return ShortLinkModel(host=host, path=path, query=record['query'], unguessable=bool(record['unguessable']))
        except (ValueError, KeyError, TypeError) as e:
            raise DataStoreError(f"Short link record '{host}/{path}' is corrupted.") from e

    @handle_redis_connection_error
    @beartype
    def find_guessable(self, host: str, query: str, **kwargs) -> str:
        """Find the path of a guessable record with the same host and canonical query

        The reuse index only points at guessable records; the pointed record is
        re-read and compared so stale or colliding index entries never match.

        Raises:
            ShortLinkNotFoundError:
                If no guessable record matches.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        path = self.redis.get(self.keys.reuse_key(host, query))
        if path is None:
            raise ShortLinkNotFoundError(f"No reusable short link for '{host}' and query '{query}'.")
        if isinstance(path, bytes):
            path = path.decode()

        record = self.get(host, path)
        if record.unguessable or record.query != query:
            raise ShortLinkNotFoundError(f"No reusable short link for '{host}' and query '{query}'.")
        return path
