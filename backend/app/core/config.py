import json
import os
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


class Settings(BaseModel):
    # AWS Cognito settings (internal surface authentication)
    cognito_region: str = os.getenv("COGNITO_REGION", "us-east-1")
    cognito_user_pool_id: Optional[str] = os.getenv("COGNITO_USER_POOL_ID")
    cognito_app_client_id: Optional[str] = os.getenv("COGNITO_APP_CLIENT_ID")
    cognito_account_claim: str = os.getenv("COGNITO_ACCOUNT_CLAIM", "custom:account_id")

    @property
    def cognito_issuer(self) -> str:
        """Get the Cognito issuer URL."""
        return f"https://cognito-idp.{self.cognito_region}.amazonaws.com/{self.cognito_user_pool_id}"

    @property
    def cognito_jwks_url(self) -> str:
        """Get the Cognito JWKS URL for token verification."""
        return f"{self.cognito_issuer}/.well-known/jwks.json"

    # Supabase (search engine procedures are exposed as RPC functions)
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    # API
    cors_origins: list[str] = json.loads(os.getenv("CORS_ORIGINS", '["*"]'))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Search
    search_history_limit: int = int(os.getenv("SEARCH_HISTORY_LIMIT", "10"))

    # Client / terminal UI
    search_api_url: str = os.getenv("SEARCH_API_URL", "http://localhost:8000/api/v1")
    search_api_token: str | None = os.getenv("SEARCH_API_TOKEN")
    search_state_path: str = os.getenv(
        "SEARCH_STATE_PATH",
        os.path.join(os.path.expanduser("~"), ".furniture-search", "state.json"),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = Settings()
