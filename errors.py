"""
Exception hierarchy for identifier tokenization.

Every error derives from ValueError so callers that only care about "bad input"
can keep catching the built-in. Decode-side failures all derive from
InvalidToken; callers that make accept/reject decisions should catch that and
nothing narrower. The subclasses exist so logs can tell the kinds apart.
"""


class TokenizerError(ValueError):
    """Base class for all tokenizer errors."""
    pass


class ConfigurationError(TokenizerError):
    """Raised at construction time for settings that can never produce valid tokens."""
    pass


class InvalidIdentifier(TokenizerError):
    """The value passed to encode is not a non-negative integer."""
    pass


# --- Codec errors ---

class CodecError(TokenizerError):
    pass


class UnsupportedBase(CodecError):
    def __init__(self, base):
        super().__init__(f"Base must be an integer between 2 and 62, got {base!r}")
        self.base = base


class InvalidDigit(CodecError):
    def __init__(self, char: str, base: int):
        super().__init__(f"Invalid digit {char!r} for base {base}")
        self.char = char
        self.base = base


# --- Decode rejections ---

class InvalidToken(TokenizerError):
    """A token was rejected. This is the only outcome callers should act on."""
    kind = "invalid"


class MalformedToken(InvalidToken):
    """Token is too short or contains symbols outside the display alphabet."""
    kind = "malformed"


class TagMismatch(InvalidToken):
    """Token is well-formed but its integrity tag does not match the identifier."""
    kind = "tag_mismatch"
