"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client
    - Healthcheck Redis client (with bounded connection retries)

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
        ...     pass
        ...
        >>> dao = ShortLinkRedisDAO(prefix="durablelinks:prod")
        >>> dao._healthcheck()
        True
"""

import time
import logging
from typing import Optional

import redis

from durablelinks.constants import REDIS_CONNECT_ATTEMPTS, REDIS_CONNECT_RETRY_DELAY
from durablelinks.dao.redis.redis_key_schema import RedisKeySchema
from durablelinks.dao.redis.helpers import redis_location
from durablelinks.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity, retrying a bounded number of times.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        redis_connect_attempts: int = REDIS_CONNECT_ATTEMPTS,
        redis_connect_retry_delay: float = REDIS_CONNECT_RETRY_DELAY,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_host (Optional[str]):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (Optional[int]):
                Redis server port. Defaults to 6379.

            redis_db (Optional[int]):
                Redis database index. Defaults to 0.

            redis_decode_responses (Optional[bool]):
                If True, decodes Redis responses. Defaults to True.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_socket_timeout (Optional[float]):
                Seconds to wait for a Redis reply before timing out. None waits forever.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            redis_connect_attempts (int):
                How many times to PING Redis before giving up. Defaults to 3.

            redis_connect_retry_delay (float):
                Seconds to wait between PING attempts. Defaults to 2.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self.connect_attempts = max(1, int(redis_connect_attempts))
        self.connect_retry_delay = float(redis_connect_retry_delay)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Retries up to `connect_attempts` times, sleeping `connect_retry_delay`
        seconds between attempts.

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        error = None
        for attempt in range(1, self.connect_attempts + 1):
            try:
                self.redis.ping()
            except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
                error = e
                logger.warning(
                    'Failed to connect to Redis, attempt %d/%d.',
                    attempt,
                    self.connect_attempts,
                    extra={'redis': redis_location(self.redis)},
                )
                if attempt < self.connect_attempts:
                    time.sleep(self.connect_retry_delay)
            else:
                return True

        if raise_error:
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)} after {self.connect_attempts} attempts. "
                'Check the provided configuration parameters.'
            ) from error
        return False
