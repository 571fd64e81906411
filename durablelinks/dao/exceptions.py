"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a ShortLinkModel is not found in the data store.

    ShortLinkAlreadyExistsError:
        Raised when attempting to insert a ShortLinkModel whose (host, path) already exists.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, OOM, etc.).

    DataStoreTimeoutError:
        Raised when a data store call exceeds its timeout.

Example:
    >>> from durablelinks.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link 'x.link/abc123' not found.")
    Traceback (most recent call last):
        ...
    durablelinks.dao.exceptions.ShortLinkNotFoundError: Short link 'x.link/abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a ShortLinkModel is not found in the data store."""

    pass


class ShortLinkAlreadyExistsError(DAOError):
    """Exception raised when a short link path is already taken for its host."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass


class DataStoreTimeoutError(DataStoreError):
    """Exception raised when a data store call times out."""

    pass
