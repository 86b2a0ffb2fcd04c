"""
CORS middleware — configures allowed origins, methods, and headers.

Origins come from the CORS_ORIGINS setting (a JSON array).
Version: 1.0.0
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings


def apply_cors(app: FastAPI) -> None:
    """Apply CORS middleware for the configured origins."""
    origins = get_settings().cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
