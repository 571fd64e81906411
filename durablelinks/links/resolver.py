"""Resolve requested short (or preview) links back to their long links."""

import logging
import re
from urllib.parse import urlsplit

from durablelinks.dao.base import ShortLinkBaseDAO
from durablelinks.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from durablelinks.exceptions import InvalidPathFormatError, InvalidRequestedLinkError, LinkNotFoundError, StorageError
from durablelinks.models import LongLinkResponse
from durablelinks.utils.config import LinkSettings


logger = logging.getLogger(__name__)

PREVIEW_PREFIX = 'preview.'
PREVIEW_LABEL_SUFFIX = '-preview'

# Generated paths only ever use the shortener alphabet
PATH_RE = re.compile(r'[A-Za-z0-9]+')


def remove_preview_from_host(host: str) -> str:
    """Map a preview host onto its production host

    Example:
        >>> remove_preview_from_host('preview.foo.com')
        'foo.com'
        >>> remove_preview_from_host('acme-preview.short.link')
        'acme.short.link'
        >>> remove_preview_from_host('foo.com')
        'foo.com'
    """
    if host.startswith(PREVIEW_PREFIX):
        return host.removeprefix(PREVIEW_PREFIX)

    label, dot, rest = host.partition('.')
    if dot and label.endswith(PREVIEW_LABEL_SUFFIX):
        return f'{label.removesuffix(PREVIEW_LABEL_SUFFIX)}.{rest}'
    return host


def extract_path(path: str) -> str:
    """Return the single path segment of a short link

    Raises:
        InvalidPathFormatError: If the path isn't exactly one alphanumeric segment.
    """
    segments = path.strip('/').split('/')
    if len(segments) != 1 or not PATH_RE.fullmatch(segments[0]):
        raise InvalidPathFormatError(f"Unexpected path format '{path}'.")
    return segments[0]


def resolve(dao: ShortLinkBaseDAO, settings: LinkSettings, requested_link: str) -> LongLinkResponse:
    """Reconstruct the long link of a requested short link

    The lookup uses the lowercased host with any preview marker removed, while the
    reconstructed long link keeps the host exactly as requested.

    Raises:
        InvalidRequestedLinkError: If the requested link can't be parsed or has no host.
        InvalidPathFormatError: If the path isn't a single alphanumeric segment.
        LinkNotFoundError: If no short link is stored for the host and path.
        StorageError: If the data store fails.
    """
    try:
        parts = urlsplit(requested_link)
    except ValueError as e:
        raise InvalidRequestedLinkError(f"Invalid requested link '{requested_link}'.") from e
    if not parts.netloc:
        raise InvalidRequestedLinkError(f"Requested link '{requested_link}' has no host.")

    host = parts.netloc
    lookup_host = remove_preview_from_host(host.lower())
    path = extract_path(parts.path)

    try:
        record = dao.get(lookup_host, path)
    except ShortLinkNotFoundError as e:
        raise LinkNotFoundError(f"Short link '{requested_link}' not found.") from e
    except DataStoreError as e:
        raise StorageError(f'Failed to retrieve link: {e}') from e

    long_link = f'{settings.url_scheme}://{host}/{path}'
    if record.query:
        long_link += f'?{record.query}'

    logger.debug('Link retrieved from service.', extra={'path': path, 'long_link': long_link})
    return LongLinkResponse(long_link=long_link)
