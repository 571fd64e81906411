"""Utility functions for application configuration management.

Two kinds of configuration are loaded once per invocation and passed around
as plain values:

1. Link settings (`LinkSettings`), read from environment variables:

    URL_SCHEME                    – scheme of generated links (default: https)
    SHORT_PATH_LENGTH             – length of SHORT paths (default: 6)
    UNGUESSABLE_PATH_LENGTH       – length of unguessable paths (default: 10)
    ALLOWED_DOMAINS               – comma-separated allow list of target link domains
    DEFAULT_ANDROID_PACKAGE_NAME  – optional default 'apn' for parsed long links
    DEFAULT_IOS_STORE_ID          – optional default 'isi' for parsed long links

2. Data store connection settings, stored in **AWS AppConfig**. The
   configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "create_short_link": {
                "redis": { ... }
            },
            "exchange_short_link": {
                "redis": { ... }
            }
        }
    }

   Each Lambda loads its own section (e.g., `"create_short_link"`).

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load data store configuration for a given Lambda from AWS AppConfig.
        In SAM, load configuration from a local AppConfig agent.

Classes:
    LinkSettings:
        Immutable link settings.

Example:
    >>> from durablelinks.utils.config import LinkSettings, load_config
    >>> settings = LinkSettings.from_env()
    >>> settings.short_path_length
    6
    >>> load_config('create_short_link')['redis']['host']
    'redis.internal'
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from dataclasses import dataclass
from collections.abc import Callable

import boto3

from durablelinks.constants import ALLOWED_URL_SCHEMES, ENV, PathLength
from durablelinks.exceptions import BadConfigurationError
from durablelinks.types import AppConfigDataClient, LambdaConfiguration
from durablelinks.utils.helpers import require_environment
from durablelinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"{name} must be an integer (given value: '{raw}').") from e
    if value <= 0:
        raise BadConfigurationError(f'{name} must be a positive integer (given value: {value}).')
    return value


def _env_optional(name: str) -> str | None:
    # NOTE: an empty variable counts as set, mirroring os.environ semantics
    return os.environ.get(name)


@dataclass(frozen=True)
class LinkSettings:
    """Immutable durable link settings.

    Attributes:
        url_scheme (str):
            Scheme of generated short and long links ('http' or 'https').
        short_path_length (int):
            Length of reusable SHORT path tokens.
        unguessable_path_length (int):
            Length of unguessable path tokens.
        allowed_domains (tuple[str, ...]):
            Allow list of target link domains. Empty rejects every link.
        default_android_package_name (str | None):
            Default 'apn' applied when parsing long links.
        default_ios_store_id (str | None):
            Default 'isi' applied when parsing long links.
    """

    url_scheme: str = 'https'
    short_path_length: int = PathLength.SHORT
    unguessable_path_length: int = PathLength.UNGUESSABLE
    allowed_domains: tuple[str, ...] = ()
    default_android_package_name: str | None = None
    default_ios_store_id: str | None = None

    def __post_init__(self):
        if self.url_scheme not in ALLOWED_URL_SCHEMES:
            raise BadConfigurationError(f"URL scheme must be 'http' or 'https' (given value: '{self.url_scheme}').")
        for name in ('short_path_length', 'unguessable_path_length'):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise BadConfigurationError(f'{name} must be a positive integer (given value: {value!r}).')

    @classmethod
    def from_env(cls) -> 'LinkSettings':
        """Load link settings from environment variables

        Raises:
            BadConfigurationError:
                If a length is not a positive integer or the scheme isn't http(s).
        """
        domains = os.environ.get(ENV.Links.ALLOWED_DOMAINS, '')
        return cls(
            url_scheme=os.environ.get(ENV.Links.URL_SCHEME, 'https').strip().lower(),
            short_path_length=_env_int(ENV.Links.SHORT_PATH_LENGTH, PathLength.SHORT),
            unguessable_path_length=_env_int(ENV.Links.UNGUESSABLE_PATH_LENGTH, PathLength.UNGUESSABLE),
            allowed_domains=tuple(d.strip().lower() for d in domains.split(',') if d.strip()),
            default_android_package_name=_env_optional(ENV.Links.DEFAULT_ANDROID_PACKAGE_NAME),
            default_ios_store_id=_env_optional(ENV.Links.DEFAULT_IOS_STORE_ID),
        )


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


def _lambda_section(document: dict, lambda_name: str) -> LambdaConfiguration:
    try:
        backend = document['active_backend']
        return {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' configuration for its active backend.") from e


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load data store configuration for a given Lambda from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "create_short_link" or "exchange_short_link").

    Returns:
        dict: {<active backend>: <backend config>} for the requested Lambda.

    Raises:
        MissingEnvironmentVariableError:
            If an AppConfig identifier is not set.
        BadConfigurationError:
            If the document lacks the Lambda's section.
        botocore.exceptions.ClientError:
            If AppConfig calls fail.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
