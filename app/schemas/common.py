"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str


class ImportResponse(BaseModel):
    """Result of a successful ingestion."""
    result: str = "OK"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str
