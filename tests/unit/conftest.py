from unittest.mock import MagicMock

import pytest
import redis

from durablelinks.dao.base import ShortLinkBaseDAO
from durablelinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from durablelinks.models import ShortLinkModel
from durablelinks.utils.config import LinkSettings


class InMemoryShortLinkDAO(ShortLinkBaseDAO):
    """Dictionary-backed DAO used to exercise the link flows end to end."""

    def __init__(self):
        self.records: dict[tuple[str, str], ShortLinkModel] = {}

    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'InMemoryShortLinkDAO':
        key = (short_link.host, short_link.path)
        if key in self.records:
            raise ShortLinkAlreadyExistsError(f"Short link '{short_link.host}/{short_link.path}' already exists.")
        self.records[key] = short_link
        return self

    def get(self, host: str, path: str, **kwargs) -> ShortLinkModel:
        try:
            return self.records[(host, path)]
        except KeyError:
            raise ShortLinkNotFoundError(f"Short link '{host}/{path}' not found.") from None

    def find_guessable(self, host: str, query: str, **kwargs) -> str:
        for record in self.records.values():
            if record.host == host and record.query == query and not record.unguessable:
                return record.path
        raise ShortLinkNotFoundError(f"No reusable short link for '{host}'.")


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    client.get.return_value = None
    client.set.return_value = True
    return client


@pytest.fixture
def settings() -> LinkSettings:
    return LinkSettings(allowed_domains=('example.com',))


@pytest.fixture
def memory_dao() -> InMemoryShortLinkDAO:
    return InMemoryShortLinkDAO()
