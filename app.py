from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from slowapi import _rate_limit_exceeded_handler, errors

# Import core modules
import config
from core_logic import logger
from encoding import get_tokenizer
from limiter import limiter
from router import api_router, web_router

# --- LIFESPAN AND APP SETUP ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config.config.validate()
    # Derive the key up front so a bad configuration fails at startup, not on the first request
    tokenizer = get_tokenizer()
    logger.info(f"Application started successfully with {tokenizer!r}")
    try:
        yield
    finally:
        logger.info("Application shutdown complete")

# Main app instance
app = FastAPI(
    title="ID Tokenizer",
    lifespan=lifespan
)

# --- MIDDLEWARE ---
app.state.limiter = limiter
app.add_exception_handler(errors.RateLimitExceeded, _rate_limit_exceeded_handler)

# --- APPLICATION MOUNTING ---

app.include_router(api_router)
app.include_router(web_router)

# --- GLOBAL ERROR HANDLER ---

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
