"""Truncated HMAC tags over identifiers."""
import hashlib
import hmac

from errors import ConfigurationError


def digest_bits(algorithm: str) -> int:
    """Returns the native output size in bits of a hashlib algorithm."""
    try:
        return hashlib.new(algorithm).digest_size * 8
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Unsupported hash algorithm: {algorithm!r}") from e


def make_tag(message: str, key: bytes, algorithm: str, tag_len_hex: int) -> str:
    """
    Creates the HMAC of message under key, truncated to the first tag_len_hex
    lowercase hex digits (the most significant bits).
    """
    full = hmac.new(key, message.encode("ascii"), algorithm).hexdigest()
    return full[:tag_len_hex]
