import functools
from collections.abc import Callable

import xxhash


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing short links.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "durablelinks:prod" or "durablelinks:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, host: str, path: str) -> str:
        return f'links:{host}:{path}'

    @prefix_key
    def reuse_key(self, host: str, query: str) -> str:
        # Canonical queries can be long; index them by a 128-bit digest instead.
        # Reuse keys live outside 'links:' so no requested path can address them.
        # Digest collisions are harmless: lookups verify the stored query.
        return f'reuse:{host}:{xxhash.xxh128_hexdigest(query.encode())}'
