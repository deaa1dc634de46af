"""
Key derivation for the tokenizer's HMAC key.

This is PBKDF2-HMAC-SHA256 producing exactly one output block with a fixed
iteration count. The constants must never change: every token issued under a
given password/salt depends on them.
"""
import hashlib
from typing import Union

KDF_ALGORITHM = "sha256"
KDF_ITERATIONS = 1000

# One block: the key is exactly one digest long.
KEY_SIZE = hashlib.new(KDF_ALGORITHM).digest_size


def _as_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def derive_key(password: Union[str, bytes], salt: Union[str, bytes]) -> bytes:
    """
    Derives a KEY_SIZE byte key from a password and salt.

    U1 = HMAC(password, salt || INT(1)), Ui = HMAC(password, U(i-1)),
    and the key is U1 ^ U2 ^ ... ^ U1000.
    """
    return hashlib.pbkdf2_hmac(
        KDF_ALGORITHM, _as_bytes(password), _as_bytes(salt), KDF_ITERATIONS, dklen=KEY_SIZE
    )
