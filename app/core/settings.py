"""
Core settings and environment variables for the Safety Signal Engine.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Safety Signal Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:5174,http://127.0.0.1:5173"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Routing (ETA estimation)
    # - MAPBOX_ACCESS_TOKEN: optional; without it ETA estimation is skipped
    MAPBOX_ACCESS_TOKEN: Optional[str] = None
    ROUTING_PROFILE: str = "driving"
    ROUTING_TIMEOUT_SECONDS: float = 5.0

    # Live alert cache
    ALERT_FETCH_LIMIT: int = 50

    # Safety zones
    DEFAULT_ZONE_RADIUS_METERS: int = 200

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
