"""
Arbitrary-precision base conversion on digit strings.

Numbers are handled as lists of digit values and converted by repeated long
division, so there is no upper limit on their size. The conversion alphabet is
always 0-9a-zA-Z. Base-32 display alphabets (what actually ends up in a token)
are a separate mapping applied on top of canonical base-32 digits.
"""
from typing import Dict, List

from errors import InvalidDigit, UnsupportedBase

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
MIN_BASE = 2
MAX_BASE = len(ALPHABET)

_DIGIT_VALUES: Dict[str, int] = {char: value for value, char in enumerate(ALPHABET)}

# Canonical base-32 digits as produced by convert(..., 32).
BASE32_DIGITS = ALPHABET[:32]

# Display alphabets for base-32 tokens, both 32 symbols long.
CROCKFORD = "0123456789abcdefghjkmnpqrstvwxyz"
LEGACY = BASE32_DIGITS

DISPLAY_ALPHABETS: Dict[str, str] = {
    "crockford": CROCKFORD,
    "legacy": LEGACY,
}

# Characters commonly mistyped for Crockford symbols.
_CROCKFORD_ALIASES = str.maketrans({"i": "1", "l": "1", "o": "0"})


def _check_base(base) -> int:
    if isinstance(base, bool) or not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
        raise UnsupportedBase(base)
    return base


def _to_digits(numstring: str, base: int) -> List[int]:
    digits = []
    for char in numstring:
        value = _DIGIT_VALUES.get(char)
        if value is None or value >= base:
            raise InvalidDigit(char, base)
        digits.append(value)
    return digits


def convert(numstring: str, from_base: int, to_base: int) -> str:
    """
    Converts a non-negative number between bases 2 and 62.

    Empty and all-zero input both convert to "0". Leading zeros are never
    emitted in the output.
    """
    _check_base(from_base)
    _check_base(to_base)

    number = _to_digits(str(numstring), from_base)
    result = []
    while True:
        remainder = 0
        quotient = []
        for digit in number:
            remainder = remainder * from_base + digit
            if remainder >= to_base:
                quotient.append(remainder // to_base)
                remainder %= to_base
            elif quotient:
                quotient.append(0)
        result.append(ALPHABET[remainder])
        number = quotient
        if not number:
            break
    return "".join(reversed(result))


def to_display(digits: str, alphabet: str) -> str:
    """Maps canonical base-32 digits onto a display alphabet."""
    table = str.maketrans(BASE32_DIGITS, alphabet)
    return digits.translate(table)


def from_display(text: str, alphabet: str) -> str:
    """Maps display symbols back to canonical base-32 digits."""
    lookup = {char: BASE32_DIGITS[i] for i, char in enumerate(alphabet)}
    digits = []
    for char in text:
        digit = lookup.get(char)
        if digit is None:
            raise InvalidDigit(char, 32)
        digits.append(digit)
    return "".join(digits)


def normalize_crockford(text: str) -> str:
    """
    Cleans up a hand-typed Crockford token: case, hyphens and the usual
    i/l/o look-alikes.
    """
    return text.strip().replace("-", "").lower().translate(_CROCKFORD_ALIASES)
