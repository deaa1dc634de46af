import os

# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Centralized configuration with validation"""

    # Token key material. Changing either invalidates every issued token.
    TOKEN_PASSWORD: str | None = os.getenv("TOKEN_PASSWORD")
    TOKEN_SALT: str | None = os.getenv("TOKEN_SALT")

    # Token format. Fixed for the lifetime of a key.
    TOKEN_TAG_BITS: int = int(os.getenv("TOKEN_TAG_BITS", "64"))
    TOKEN_HASH_ALGORITHM: str = os.getenv("TOKEN_HASH_ALGORITHM", "sha256")
    TOKEN_ALPHABET: str = os.getenv("TOKEN_ALPHABET", "crockford")
    TOKEN_NORMALIZE: bool = _env_bool("TOKEN_NORMALIZE")

    # Rate limiting
    RATE_LIMIT_ENCODE: str = os.getenv("RATE_LIMIT_ENCODE", "10/minute")
    RATE_LIMIT_DECODE: str = os.getenv("RATE_LIMIT_DECODE", "30/minute")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "logs"))

    SUPPORTED_ALPHABETS: tuple[str, ...] = ("crockford", "legacy")

    @classmethod
    def validate(cls):
        """Validate configuration on startup"""
        if not cls.TOKEN_PASSWORD:
            raise ValueError("TOKEN_PASSWORD must be set")
        if not cls.TOKEN_SALT:
            raise ValueError("TOKEN_SALT must be set")
        if cls.TOKEN_TAG_BITS <= 0:
            raise ValueError("TOKEN_TAG_BITS must be positive")
        if cls.TOKEN_ALPHABET not in cls.SUPPORTED_ALPHABETS:
            raise ValueError(f"TOKEN_ALPHABET must be one of: {cls.SUPPORTED_ALPHABETS}")

# ============================================================================
# SINGLETON INSTANCE & DERIVED CONSTANTS
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
