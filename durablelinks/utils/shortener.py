"""Path token generation utility

This module provides a helper function for generating random, uniformly
distributed alphanumeric path tokens for short links.

Functions:
    generate_path(length):
        Generate a random Base62 token suitable for use as a URL path.

Example:
    >>> from durablelinks.utils import generate_path
    >>> generate_path(6)
    'Gh71WP'
"""

import secrets
import string


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_path(length: int) -> str:
    """Generate a random path token of the given length.

    Every character is drawn independently and uniformly from the Base62
    alphabet using the `secrets` CSPRNG, so long tokens are unguessable.

    Args:
        length (int):
            Number of characters in the token. Must be positive.

    Returns:
        str: A random alphanumeric token.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
