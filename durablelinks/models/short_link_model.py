from dataclasses import dataclass


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a persisted short link mapping.

    Attributes:
        host (str):
            Authority the short link was issued for (e.g. 'x.link').
        path (str):
            Randomly generated path token, unique per host.
        query (str):
            Canonical (sorted by key) query string of the durable link.
        unguessable (bool):
            True for long, always freshly minted paths. Unguessable records
            are never reused for new durable link requests.

    Example:
        >>> record = ShortLinkModel(host='x.link', path='aB3dE9', query='link=https%3A%2F%2Fexample.com')
        >>> record.unguessable
        False
    """

    host: str
    path: str
    query: str
    unguessable: bool = False
