"""Query parameter key table and canonical query encoding.

`QUERY_KEYS` is the single mapping between LinkDescription fields and the
short query keys of a long durable link. Both the canonicalizer (description
-> query) and the long link parser (query -> description) walk this table.
"""

import dataclasses
import functools
from collections.abc import Iterable, Iterator
from typing import TypeVar
from urllib.parse import urlencode

from durablelinks.models import LinkDescription


# fmt: off
QUERY_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('link',         ('link',)),
    ('apn',          ('android', 'package_name')),
    ('afl',          ('android', 'fallback_link')),
    ('amv',          ('android', 'min_version_code')),
    ('ifl',          ('ios', 'fallback_link')),
    ('ipfl',         ('ios', 'ipad_fallback_link')),
    ('isi',          ('ios', 'app_store_id')),
    ('ofl',          ('other_platform', 'fallback_url')),
    ('st',           ('social', 'title')),
    ('sd',           ('social', 'description')),
    ('si',           ('social', 'image_link')),
    ('utm_source',   ('analytics', 'marketing', 'utm_source')),
    ('utm_medium',   ('analytics', 'marketing', 'utm_medium')),
    ('utm_campaign', ('analytics', 'marketing', 'utm_campaign')),
    ('utm_term',     ('analytics', 'marketing', 'utm_term')),
    ('utm_content',  ('analytics', 'marketing', 'utm_content')),
    ('at',           ('analytics', 'itunes_connect', 'at')),
    ('ct',           ('analytics', 'itunes_connect', 'ct')),
    ('mt',           ('analytics', 'itunes_connect', 'mt')),
    ('pt',           ('analytics', 'itunes_connect', 'pt')),
)
# fmt: on

# Query key holding the requested suffix option in long links
SUFFIX_KEY = 'path'


def field_value(description: LinkDescription, attrs: tuple[str, ...]) -> str:
    return functools.reduce(getattr, attrs, description)


T = TypeVar('T')


def with_field(obj: T, attrs: tuple[str, ...], value: str) -> T:
    """Return a copy of a (nested) frozen dataclass with one field replaced."""
    head, *rest = attrs
    if not rest:
        return dataclasses.replace(obj, **{head: value})
    return dataclasses.replace(obj, **{head: with_field(getattr(obj, head), tuple(rest), value)})


class QueryEncoding:
    """Ordered (key, value) query parameters of a durable link

    Example:
        >>> encoding = QueryEncoding()
        >>> encoding.add('link', 'https://example.com')
        >>> encoding.add_if_present('apn', '')
        >>> encoding.add_if_present('afl', 'https://example.com/android')
        >>> encoding.canonical()
        'afl=https%3A%2F%2Fexample.com%2Fandroid&link=https%3A%2F%2Fexample.com'
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()):
        self._pairs = list(pairs)

    def add(self, key: str, value: str) -> None:
        self._pairs.append((key, value))

    def add_if_present(self, key: str, value: str) -> None:
        if value:
            self._pairs.append((key, value))

    def get(self, key: str, default: str | None = None) -> str | None:
        return next((v for k, v in self._pairs if k == key), default)

    def keys(self) -> list[str]:
        return [k for k, _ in self._pairs]

    def canonical(self) -> str:
        """Serialize the parameters sorted by key.

        Two encodings of the same parameters always serialize to the same
        string regardless of insertion order; this string is the reuse lookup key.
        """
        return urlencode(sorted(self._pairs, key=lambda pair: pair[0].encode()))

    def long_link(self, scheme: str, host: str) -> str:
        return f'{scheme}://{host}/?{self.canonical()}'

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, QueryEncoding):
            return NotImplemented
        return self.canonical() == other.canonical()

    def __repr__(self) -> str:
        return f'QueryEncoding({self._pairs!r})'
