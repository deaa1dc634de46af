import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import Path, HTTPException, status

# Import local modules/constants
import config
from encoding import get_tokenizer
from errors import InvalidToken

# --- LOGGING SETUP ---

def setup_logging() -> logging.Logger:
    """Configure structured logging with rotation"""
    logger = logging.getLogger("id_tokenizer")
    logger.setLevel(config.config.LOG_LEVEL)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(config.config.LOG_LEVEL)

        log_dir = config.config.LOG_DIR
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "app.log"),
            maxBytes=10_485_760,
            backupCount=5
        )
        file_handler.setLevel(config.config.LOG_LEVEL)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )
        console_handler.setFormatter(formatter)
        file_handler.setFormatter(formatter)

        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    # Library modules log under their own names; route them through the same handlers.
    for name in ("obfuscation", "encoding"):
        library_logger = logging.getLogger(name)
        library_logger.setLevel(config.config.LOG_LEVEL)
        for handler in logger.handlers:
            if handler not in library_logger.handlers:
                library_logger.addHandler(handler)

    return logger

logger = setup_logging()

# --- CUSTOM EXCEPTIONS (REQUIRED BY ROUTERS) ---

class ResourceNotFoundException(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

# --- TOKEN DEPENDENCIES ---

def get_verified_id(
    token: str = Path(..., min_length=1, max_length=512, description="A token issued by this service")
) -> int:
    """
    Resolves a token path parameter to the identifier it carries.

    Malformed and tampered tokens both end in the same 404, so a caller
    probing for valid tokens learns nothing from the response.
    """
    try:
        return get_tokenizer().decode(token)
    except InvalidToken:
        raise ResourceNotFoundException()
