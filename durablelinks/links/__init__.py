from durablelinks.links.allocator import ShortLinkAllocator
from durablelinks.links.canonicalizer import canonicalize
from durablelinks.links.parser import parse_long_link
from durablelinks.links.query import QUERY_KEYS, QueryEncoding
from durablelinks.links.resolver import extract_path, remove_preview_from_host, resolve
from durablelinks.links.service import LinkService


__all__ = [
    'ShortLinkAllocator',
    'canonicalize',
    'parse_long_link',
    'QUERY_KEYS',
    'QueryEncoding',
    'extract_path',
    'remove_preview_from_host',
    'resolve',
    'LinkService',
]
