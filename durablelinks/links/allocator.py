"""Short path allocation: reuse an existing short path or mint a new one.

Allocation flow for (host, query, suffix option):
    1. SHORT requests look for a guessable record with the same host and
       canonical query and reuse its path.
    2. Otherwise a random path is generated (short or unguessable length) and
       inserted. A taken path is regenerated, up to `max_attempts` times.

The reuse lookup and the insert are not atomic: concurrent identical SHORT
requests may each mint a path. Every minted path still resolves correctly.
"""

import logging

from durablelinks.constants import MAX_PATH_ALLOCATION_ATTEMPTS
from durablelinks.dao.base import ShortLinkBaseDAO
from durablelinks.dao.exceptions import DataStoreError, ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from durablelinks.exceptions import StorageError
from durablelinks.links.query import QueryEncoding
from durablelinks.models import ShortLinkModel, SuffixOption
from durablelinks.utils.config import LinkSettings
from durablelinks.utils.shortener import generate_path


logger = logging.getLogger(__name__)


class ShortLinkAllocator:
    """Allocate short links for canonical durable link queries

    Attributes:
        dao (ShortLinkBaseDAO):
            Persistence collaborator.
        settings (LinkSettings):
            URL scheme and path lengths.
        max_attempts (int):
            Total insert attempts before a path collision becomes a StorageError.
    """

    def __init__(self, dao: ShortLinkBaseDAO, settings: LinkSettings, max_attempts: int = MAX_PATH_ALLOCATION_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1 (given value: {max_attempts}).')
        self.dao = dao
        self.settings = settings
        self.max_attempts = max_attempts

    def short_link(self, host: str, path: str) -> str:
        return f'{self.settings.url_scheme}://{host}/{path}'

    def allocate(self, host: str, encoding: QueryEncoding, suffix_option: SuffixOption | None) -> str:
        """Return the short link for a host and its query parameters

        Raises:
            StorageError:
                If the data store fails, or no free path was found in `max_attempts` tries.
        """
        query = encoding.canonical()
        reusable = suffix_option == SuffixOption.SHORT

        if reusable:
            try:
                path = self.dao.find_guessable(host, query)
            except ShortLinkNotFoundError:
                pass
            except DataStoreError as e:
                logger.error('Error querying for existing short link.', extra={'host': host, 'error': str(e)})
                raise StorageError(f'Failed to look up existing short link: {e}') from e
            else:
                logger.debug('Re-using existing short link.', extra={'host': host, 'path': path, 'query_params': query})
                return self.short_link(host, path)

        length = self.settings.short_path_length if reusable else self.settings.unguessable_path_length
        for attempt in range(1, self.max_attempts + 1):
            path = generate_path(length)
            try:
                self.dao.insert(ShortLinkModel(host=host, path=path, query=query, unguessable=not reusable))
            except ShortLinkAlreadyExistsError:
                logger.warning(
                    'Generated path is already taken, attempt %d/%d.',
                    attempt,
                    self.max_attempts,
                    extra={'host': host, 'path': path},
                )
            except DataStoreError as e:
                raise StorageError(f'Failed to store link: {e}') from e
            else:
                logger.debug('New link stored in database.', extra={'host': host, 'path': path, 'query_params': query})
                return self.short_link(host, path)

        raise StorageError(f"Failed to store link: no free path for '{host}' after {self.max_attempts} attempts.")
