from durablelinks.dao.redis.redis_key_schema import RedisKeySchema
from durablelinks.dao.redis.short_link_redis_dao import ShortLinkRedisDAO
from durablelinks.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortLinkRedisDAO',
    'RedisClientMixin',
]
