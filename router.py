import logging

from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import JSONResponse

import config
from core_logic import get_verified_id
from encoding import get_tokenizer
from errors import TokenizerError
from limiter import limiter
from models import TokenCreatePayload, TokenResponse, IdentifierResponse, ErrorResponse

# --- Router Setup ---

# API Router for versioning and organization.
api_router = APIRouter(
    prefix="/api/v1",
    tags=["Tokens"],  # Group endpoints in the docs
)

# Service endpoints outside the versioned API.
web_router = APIRouter(
    tags=["Monitoring"],
)

logger = logging.getLogger(__name__)

# --- Monitoring ---

@web_router.get("/health", summary="Health Check")
async def health_check():
    """Reports whether the tokenizer could be configured."""
    try:
        get_tokenizer()
    except TokenizerError as e:
        logger.error(f"Tokenizer health check failed: {e}")
        return JSONResponse(content={"status": "error"}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return {"status": "ok"}

# --- API Routes ---

@api_router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a token for an identifier",
)
@limiter.limit(config.RATE_LIMIT_ENCODE)
async def create_token(request: Request, payload: TokenCreatePayload):
    """Signs an identifier and returns the token to hand out."""
    token = get_tokenizer().encode(payload.id)
    logger.info(f"Issued token of length {len(token)}")
    return TokenResponse(id=payload.id, token=token)


@api_router.get(
    "/tokens/{token}",
    response_model=IdentifierResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Verify a token",
)
@limiter.limit(config.RATE_LIMIT_DECODE)
async def read_token(request: Request, identifier: int = Depends(get_verified_id)):
    """Returns the identifier a valid token carries; 404 for anything else."""
    return IdentifierResponse(id=identifier)
