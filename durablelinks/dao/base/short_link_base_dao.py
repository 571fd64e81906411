"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all short link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, PostgreSQL).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortLinkModel objects.
    - Provide a reuse lookup for guessable (short) paths.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from durablelinks.models import ShortLinkModel
        >>> from durablelinks.dao.redis import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(...)

        >>> dao.insert(ShortLinkModel(host='x.link', path='aB3dE9', query='link=https%3A%2F%2Fexample.com'))

        >>> dao.get('x.link', 'aB3dE9').query
        'link=https%3A%2F%2Fexample.com'

        >>> dao.find_guessable('x.link', 'link=https%3A%2F%2Fexample.com')
        'aB3dE9'
"""

from abc import ABC, abstractmethod

from durablelinks.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkBaseDAO:
            Insert a new ShortLinkModel into the data store.
            Raises ShortLinkAlreadyExistsError if (host, path) already exists.
            Raises DataStoreError on connection or write failure.

        get(host: str, path: str, **kwargs) -> ShortLinkModel:
            Retrieve a ShortLinkModel by host and path.
            Raises ShortLinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        find_guessable(host: str, query: str, **kwargs) -> str:
            Return the path of a guessable record with the same host and query.
            Raises ShortLinkNotFoundError if there is none.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkRedisDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Records are never mutated. Deletion is left to the data store's
          retention policy.
    """

    @abstractmethod
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Insert a new ShortLinkModel into the data store.

        Args:
            short_link (ShortLinkModel):
                The record to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a record with the same host and path already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, host: str, path: str, **kwargs) -> ShortLinkModel:
        """Retrieve a ShortLinkModel from the data store by host and path.

        Raises:
            ShortLinkNotFoundError:
                If no record exists for the given host and path.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_guessable(self, host: str, query: str, **kwargs) -> str:
        """Find the path of a reusable (guessable) record for a host and canonical query.

        Unguessable records must never be returned.

        Raises:
            ShortLinkNotFoundError:
                If no guessable record matches.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
