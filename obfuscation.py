"""
Tamper-evident identifier tokens.

An identifier is encoded as base-32 and prefixed with a truncated HMAC of its
decimal form, so a token can be checked as one we issued without any database
lookup. This is obfuscation, not encryption: anyone can decode the identifier
from a token. What they cannot do is produce a valid token for an identifier
of their choosing.

Use a different salt (or password) per type of resource. Otherwise a valid
token for one resource is also valid for any other resource with the same id.

Shorter tags make shorter tokens but raise the odds of a forged tag being
accepted. 64 bits is the default; anything under 32 is asking for trouble.
"""
import hmac
import logging
import math
from typing import Optional, Tuple, Union

import baseconv
from errors import (
    CodecError, ConfigurationError, InvalidIdentifier, InvalidToken,
    MalformedToken, TagMismatch,
)
from kdf import derive_key
from tagging import digest_bits, make_tag

logger = logging.getLogger(__name__)

DEFAULT_TAG_BITS = 64
DEFAULT_HASH_ALGORITHM = "sha256"
DEFAULT_ALPHABET = "crockford"
MIN_RECOMMENDED_TAG_BITS = 32


def canonical_identifier(identifier: Union[int, str]) -> str:
    """Returns the identifier as a decimal string without leading zeros."""
    if isinstance(identifier, bool):
        raise InvalidIdentifier("Identifier must be an integer, not a bool")
    if isinstance(identifier, int):
        if identifier < 0:
            raise InvalidIdentifier("Identifier must not be negative")
        # str() is capped at sys.get_int_max_str_digits(); hex output is not
        return baseconv.convert(format(identifier, "x"), 16, 10)
    if isinstance(identifier, str):
        # isdigit() also accepts non-ASCII digits, so check the charset explicitly
        if not identifier or not all("0" <= c <= "9" for c in identifier):
            raise InvalidIdentifier(f"Identifier is not a non-negative decimal number: {identifier!r}")
        return identifier.lstrip("0") or "0"
    raise InvalidIdentifier(f"Unsupported identifier type: {type(identifier).__name__}")


class IdTokenizer:
    """Encodes integer ids into signed tokens and verifies them on the way back."""

    __slots__ = (
        "_key", "_hash_algorithm", "_tag_bits", "_tag_len_hex",
        "_tag_len_base32", "_alphabet_name", "_alphabet", "_normalize",
    )

    def __init__(
        self,
        password: Union[str, bytes],
        salt: Union[str, bytes],
        tag_bits: int = DEFAULT_TAG_BITS,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
        alphabet: str = DEFAULT_ALPHABET,
        normalize: bool = False,
    ):
        if not password:
            raise ConfigurationError("A password is required")
        if not salt:
            raise ConfigurationError("A salt is required")
        if isinstance(tag_bits, bool) or not isinstance(tag_bits, int):
            raise ConfigurationError(f"tag_bits must be an integer, got {tag_bits!r}")

        max_bits = digest_bits(hash_algorithm)
        if not 0 < tag_bits <= max_bits:
            raise ConfigurationError(
                f"tag_bits must be between 1 and {max_bits} for {hash_algorithm}, got {tag_bits}"
            )
        if tag_bits < MIN_RECOMMENDED_TAG_BITS:
            logger.warning(
                f"Tag length of {tag_bits} bits is below {MIN_RECOMMENDED_TAG_BITS}; "
                "forged tokens will be accepted far too often"
            )

        if alphabet not in baseconv.DISPLAY_ALPHABETS:
            raise ConfigurationError(
                f"Unknown alphabet {alphabet!r}, expected one of {sorted(baseconv.DISPLAY_ALPHABETS)}"
            )
        if normalize and alphabet != "crockford":
            raise ConfigurationError("Token normalization is only available for the crockford alphabet")

        self._key = derive_key(password, salt)
        self._hash_algorithm = hash_algorithm
        self._tag_bits = tag_bits
        self._tag_len_hex = math.ceil(tag_bits / 4)
        # Sized from the hex tag so every truncated tag fits; equals ceil(tag_bits / 5)
        # whenever that is large enough (64, 128, 256, ...).
        self._tag_len_base32 = math.ceil(self._tag_len_hex * 4 / 5)
        self._alphabet_name = alphabet
        self._alphabet = baseconv.DISPLAY_ALPHABETS[alphabet]
        self._normalize = normalize

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(tag_bits={self._tag_bits}, "
            f"hash_algorithm={self._hash_algorithm!r}, alphabet={self._alphabet_name!r})"
        )

    # --- Read-only configuration ---

    @property
    def tag_bits(self) -> int:
        return self._tag_bits

    @property
    def tag_len_hex(self) -> int:
        return self._tag_len_hex

    @property
    def tag_len_base32(self) -> int:
        return self._tag_len_base32

    @property
    def hash_algorithm(self) -> str:
        return self._hash_algorithm

    @property
    def alphabet(self) -> str:
        return self._alphabet_name

    # --- Encoding ---

    def _tag(self, message: str) -> str:
        return make_tag(message, self._key, self._hash_algorithm, self._tag_len_hex)

    def encode(self, identifier: Union[int, str]) -> str:
        """Encodes an id as base32 and prepends its truncated HMAC."""
        id_dec = canonical_identifier(identifier)
        id_enc = baseconv.convert(id_dec, 10, 32)

        tag_enc = baseconv.convert(self._tag(id_dec), 16, 32).rjust(self._tag_len_base32, "0")

        return baseconv.to_display(tag_enc + id_enc, self._alphabet)

    def token_length(self, identifier: Union[int, str]) -> int:
        """Length of the token encode() returns for this identifier."""
        return self._tag_len_base32 + len(baseconv.convert(canonical_identifier(identifier), 10, 32))

    # --- Decoding ---

    def _split(self, token) -> Tuple[str, str, str]:
        if not isinstance(token, str):
            raise MalformedToken("Token must be a string")
        if self._normalize:
            token = baseconv.normalize_crockford(token)
        if len(token) <= self._tag_len_base32:
            raise MalformedToken("Token too short to hold a tag and an identifier")
        try:
            digits = baseconv.from_display(token, self._alphabet)
        except CodecError as e:
            raise MalformedToken(str(e)) from e

        tag_part = digits[:self._tag_len_base32]
        id_part = digits[self._tag_len_base32:]
        # encode() never pads the identifier, so a padded one is not ours
        if len(id_part) > 1 and id_part[0] == "0":
            raise MalformedToken("Identifier part has leading zeros")

        id_dec = baseconv.convert(id_part, 32, 10)
        tag_user = baseconv.convert(tag_part, 32, 16).rjust(self._tag_len_hex, "0")
        return id_part, id_dec, tag_user

    def decode(self, token: str) -> int:
        """
        Verifies a token and returns the identifier it carries.

        Raises InvalidToken (MalformedToken or TagMismatch) when the token was
        not issued under this key and configuration. Both cases run the same
        HMAC and comparison before failing.
        """
        failure: Optional[InvalidToken] = None
        try:
            id_part, id_dec, tag_user = self._split(token)
        except MalformedToken as e:
            failure = e
            id_part, id_dec, tag_user = "0", "0", "0" * self._tag_len_hex

        tag_expected = self._tag(id_dec)
        tags_match = hmac.compare_digest(tag_expected.encode("ascii"), tag_user.encode("ascii"))

        if failure is None and not tags_match:
            failure = TagMismatch("Token integrity tag does not match")
        if failure is not None:
            logger.info(f"Rejected token ({failure.kind}, length {len(token) if isinstance(token, str) else 'n/a'})")
            raise failure

        # Base 32 is a power of two, so int() has no digit limit here
        return int(id_part, 32)

    def verify(self, token: str) -> Optional[int]:
        """Like decode(), but returns None instead of raising for rejected tokens."""
        try:
            return self.decode(token)
        except InvalidToken:
            return None
