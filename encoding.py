"""
Handles the encoding and decoding of database IDs into signed tokens using the
configured IdTokenizer. This is the core protection against scraping and
enumeration attacks: a token for an id can only be produced by someone holding
the key.
"""
from typing import Optional
from functools import lru_cache

from config import config
from obfuscation import IdTokenizer


@lru_cache()
def get_tokenizer() -> IdTokenizer:
    """
    Returns a cached, singleton instance of the IdTokenizer.
    Key derivation runs once, on first use, with the final configuration.
    """
    return IdTokenizer(
        password=config.TOKEN_PASSWORD,
        salt=config.TOKEN_SALT,
        tag_bits=config.TOKEN_TAG_BITS,
        hash_algorithm=config.TOKEN_HASH_ALGORITHM,
        alphabet=config.TOKEN_ALPHABET,
        normalize=config.TOKEN_NORMALIZE,
    )


def encode_id(n: int) -> str:
    """Encodes a single integer ID into a signed token."""
    return get_tokenizer().encode(n)


def decode_id(s: str) -> Optional[int]:
    """Decodes a token back into an integer ID, or None if it was not issued by us."""
    return get_tokenizer().verify(s)
