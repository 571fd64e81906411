"""Parse a long durable link back into a LinkDescription."""

import dataclasses
import logging
from urllib.parse import parse_qs, urlsplit

from durablelinks.exceptions import HostInvalidError, InvalidUrlFormatError
from durablelinks.links.query import QUERY_KEYS, SUFFIX_KEY, with_field
from durablelinks.models import LinkDescription, SuffixOption
from durablelinks.utils.config import LinkSettings


logger = logging.getLogger(__name__)


def parse_long_link(long_link: str, settings: LinkSettings) -> LinkDescription:
    """Parse a long durable link, e.g. 'https://x.link/?link=...&apn=...&path=SHORT'

    The host becomes the description's host and 'link' its target link (which
    may be empty; it isn't validated here). Configured default Android package
    name and iOS App Store id apply unless the link carries its own non-empty
    'apn' / 'isi'. Every other field comes only from its query key, and the
    'path' key selects the suffix option.

    Raises:
        InvalidUrlFormatError: If the link can't be parsed.
        HostInvalidError: If the link has no host.
    """
    logger.debug('Parsing long durable link.', extra={'long_link': long_link})

    try:
        parts = urlsplit(long_link)
    except ValueError as e:
        raise InvalidUrlFormatError(f"Invalid long durable link '{long_link}'.") from e
    if not parts.netloc:
        raise HostInvalidError(f"Long durable link '{long_link}' has no host.")

    params = parse_qs(parts.query, keep_blank_values=True)

    def first(key: str) -> str:
        return params.get(key, [''])[0]

    description = LinkDescription(host=parts.netloc, link=first('link'))

    if settings.default_android_package_name is not None:
        description = with_field(description, ('android', 'package_name'), settings.default_android_package_name)
    if settings.default_ios_store_id is not None:
        description = with_field(description, ('ios', 'app_store_id'), settings.default_ios_store_id)

    for key, attrs in QUERY_KEYS:
        if key != 'link' and (value := first(key)):
            description = with_field(description, attrs, value)

    description = dataclasses.replace(description, suffix_option=SuffixOption.parse(first(SUFFIX_KEY)))

    logger.debug('Parsed long durable link.', extra={'host': description.host, 'link': description.link})
    return description
