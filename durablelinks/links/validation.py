"""Validation and normalization predicates for durable link requests.

Functions:
    clean_host(raw) -> str
        Reduce a host (possibly given as a URL) to its authority. Raises InvalidHostError.
    is_domain_allowed(allowed_domains, link) -> bool
        Check a target link's domain against the allow list.
    is_numeric_string(value) -> bool
    is_url(value) -> bool
    validate_url_scheme(link) -> None
        Raises InvalidUrlSchemeError unless the scheme is http or https.

Allow list policy:
    A link is allowed when its hostname equals an allow list entry or is a
    subdomain of one ('api.example.com' matches 'example.com'). Matching is
    case-insensitive and ignores ports. An empty allow list rejects every link.
"""

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from durablelinks.constants import ALLOWED_URL_SCHEMES
from durablelinks.exceptions import InvalidHostError, InvalidUrlSchemeError


_LABEL = r'(?!-)[a-z0-9-]{1,63}(?<!-)'
_HOST_RE = re.compile(rf'^{_LABEL}(\.{_LABEL})*(:\d{{1,5}})?$')


def clean_host(raw: str) -> str:
    """Reduce a raw host value to a lowercase authority (host[:port]).

    A scheme, user info, path, query and fragment are stripped if present.

    Example:
        >>> clean_host('https://X.link/some/path?q=1')
        'x.link'
        >>> clean_host('x.link:8443')
        'x.link:8443'

    Raises:
        InvalidHostError:
            If nothing is left after stripping, or the remainder isn't a host name.
    """
    host = (raw or '').strip()
    if '://' in host:
        try:
            host = urlsplit(host).netloc
        except ValueError as e:
            raise InvalidHostError(f"Invalid host '{raw}'.") from e
    host = re.split(r'[/?#]', host, maxsplit=1)[0]
    host = host.rpartition('@')[2].lower()

    if not host or not _HOST_RE.match(host):
        raise InvalidHostError(f"Invalid host '{raw}'.")
    return host


def is_domain_allowed(allowed_domains: Iterable[str], link: str) -> bool:
    try:
        hostname = urlsplit(link).hostname
    except ValueError:
        return False
    if not hostname:
        return False

    for domain in allowed_domains:
        domain = domain.strip().lower().rstrip('.')
        if domain and (hostname == domain or hostname.endswith(f'.{domain}')):
            return True
    return False


def is_numeric_string(value: str) -> bool:
    return bool(value) and value.isascii() and value.isdigit()


def is_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ALLOWED_URL_SCHEMES and bool(parts.netloc)


def validate_url_scheme(link: str) -> None:
    try:
        scheme = urlsplit(link).scheme.lower()
    except ValueError as e:
        raise InvalidUrlSchemeError(f"Link '{link}' has an invalid URL scheme.") from e
    if scheme not in ALLOWED_URL_SCHEMES:
        raise InvalidUrlSchemeError(f"Link '{link}' must use http or https (given scheme: '{scheme}').")
