from enum import StrEnum


class PathLength:
    """Default path token lengths."""

    SHORT = 6  # Reusable, brute-forceable short path
    UNGUESSABLE = 10  # Always freshly minted path


# Attempts to mint a path before giving up on duplicate path collisions
MAX_PATH_ALLOCATION_ATTEMPTS = 3

# Redis connection healthcheck retries (see RedisClientMixin)
REDIS_CONNECT_ATTEMPTS = 3
REDIS_CONNECT_RETRY_DELAY = 2.0  # seconds

# URL schemes accepted for target links and generated links
ALLOWED_URL_SCHEMES = frozenset({'http', 'https'})


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class Links(StrEnum):
        URL_SCHEME = 'URL_SCHEME'
        SHORT_PATH_LENGTH = 'SHORT_PATH_LENGTH'
        UNGUESSABLE_PATH_LENGTH = 'UNGUESSABLE_PATH_LENGTH'
        ALLOWED_DOMAINS = 'ALLOWED_DOMAINS'  # comma-separated
        DEFAULT_ANDROID_PACKAGE_NAME = 'DEFAULT_ANDROID_PACKAGE_NAME'
        DEFAULT_IOS_STORE_ID = 'DEFAULT_IOS_STORE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
