"""Durable link service: the operations exposed to the HTTP boundary.

Operations:
    prepare_durable_link_request(payload) -> LinkDescription
        Decode and check a create-link request body.
    create_durable_link(description) -> ShortLinkResponse
        Validate, canonicalize and allocate a short link.
    parse_long_durable_link(long_link) -> LinkDescription
        Parse a long durable link.
    resolve_short_path(requested_link) -> LongLinkResponse
        Expand a short (or preview) link into its long link.

Example:
    >>> service = LinkService(dao, LinkSettings(allowed_domains=('example.com',)))
    >>> description = service.prepare_durable_link_request(
    ...     {'durableLinkInfo': {'host': 'x.link', 'link': 'https://example.com'}, 'suffix': {'option': 'SHORT'}}
    ... )
    >>> response = service.create_durable_link(description)
    >>> response.short_link
    'https://x.link/aB3dE9'
    >>> service.resolve_short_path(response.short_link).long_link
    'https://x.link/aB3dE9?link=https%3A%2F%2Fexample.com'
"""

import logging
from typing import Any

from beartype import beartype

from durablelinks.dao.base import ShortLinkBaseDAO
from durablelinks.exceptions import (
    DomainNotAllowedError,
    InvalidAppStoreIdError,
    InvalidHostError,
    MissingHostError,
    MissingLinkError,
)
from durablelinks.links.allocator import ShortLinkAllocator
from durablelinks.links.canonicalizer import canonicalize
from durablelinks.links.parser import parse_long_link
from durablelinks.links.resolver import resolve
from durablelinks.links.validation import clean_host, is_domain_allowed, is_numeric_string, validate_url_scheme
from durablelinks.models import LinkDescription, LongLinkResponse, ShortLinkResponse
from durablelinks.utils.config import LinkSettings


logger = logging.getLogger(__name__)

LONG_DURABLE_LINK_KEY = 'longDurableLink'


class LinkService:
    """Create and resolve durable links

    Attributes:
        dao (ShortLinkBaseDAO):
            Persistence collaborator.
        settings (LinkSettings):
            Immutable link settings.
        allocator (ShortLinkAllocator):
            Short path allocator bound to the same DAO and settings.
    """

    def __init__(self, dao: ShortLinkBaseDAO, settings: LinkSettings, allocator: ShortLinkAllocator | None = None):
        self.dao = dao
        self.settings = settings
        self.allocator = allocator if allocator is not None else ShortLinkAllocator(dao, settings)

    @beartype
    def prepare_durable_link_request(self, payload: dict[str, Any]) -> LinkDescription:
        """Decode a create-link request body in two phases

        1. Bind: a non-empty 'longDurableLink' string is parsed as a long link;
           otherwise the body is bound structurally onto a LinkDescription.
        2. Check: host and link are required and the link must be http(s).

        Raises:
            InvalidRequestFormatError, InvalidUrlFormatError, HostInvalidError:
                If the body can't be bound.
            MissingHostError, MissingLinkError, InvalidUrlSchemeError:
                If the bound description is incomplete.
        """
        long_link = payload.get(LONG_DURABLE_LINK_KEY)
        if isinstance(long_link, str) and long_link:
            description = self.parse_long_durable_link(long_link)
        else:
            description = LinkDescription.from_dict(payload)

        if not description.host:
            raise MissingHostError('Durable link host is required.')
        if not description.link:
            raise MissingLinkError('Durable link target link is required.')
        validate_url_scheme(description.link)
        return description

    @beartype
    def create_durable_link(self, description: LinkDescription) -> ShortLinkResponse:
        """Create (or reuse) a short link for a durable link description

        Raises:
            InvalidHostError: If the host isn't a valid host name.
            DomainNotAllowedError: If the link's domain isn't allow-listed.
            InvalidAppStoreIdError: If 'isi' is given but not numeric.
            StorageError: If the data store fails.
        """
        logger.debug('Durable link parameters.', extra={'params': repr(description)})

        try:
            host = clean_host(description.host)
        except InvalidHostError:
            logger.error('Invalid host.', extra={'host': description.host})
            raise

        if not is_domain_allowed(self.settings.allowed_domains, description.link):
            logger.error('Domain link not in allow list.', extra={'link': description.link})
            raise DomainNotAllowedError(f"Domain of link '{description.link}' is not allowed.")

        app_store_id = description.ios.app_store_id
        if app_store_id and not is_numeric_string(app_store_id):
            raise InvalidAppStoreIdError(f"iOS App Store id '{app_store_id}' must be numeric.")

        encoding, warnings = canonicalize(description)
        short_link = self.allocator.allocate(host, encoding, description.suffix_option)

        logger.info('Durable link created.', extra={'host': host, 'short_link': short_link, 'warnings': len(warnings)})
        return ShortLinkResponse(short_link=short_link, warnings=warnings)

    @beartype
    def parse_long_durable_link(self, long_link: str) -> LinkDescription:
        return parse_long_link(long_link, self.settings)

    @beartype
    def resolve_short_path(self, requested_link: str) -> LongLinkResponse:
        return resolve(self.dao, self.settings, requested_link)
