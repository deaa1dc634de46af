from pydantic import BaseModel, Field


class TokenCreatePayload(BaseModel):
    """Request model for issuing a token."""
    id: int = Field(..., ge=0, description="Identifier to sign")


class TokenResponse(BaseModel):
    """Response model for a freshly issued token."""
    id: int
    token: str


class IdentifierResponse(BaseModel):
    """Response model for a verified token."""
    id: int


class ErrorResponse(BaseModel):
    error: str
