"""
Centralized application configuration
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """WebStore reports configuration"""

    # API Settings
    API_TITLE: str = "WebStore Reports API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Read-only reporting over the WebStore retail database"

    # Database
    # Optional at import; connection helpers raise while it is unset
    DATABASE_URL: Optional[str] = None
    DB_CONNECT_MAX_RETRIES: int = 3
    DB_CONNECT_RETRY_DELAY: float = 1.0

    # Reports
    REPORT_DATE_FORMAT: str = "%m/%d/%Y"

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
