"""Runtime configuration for RouteWise."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``ROUTEWISE_*`` environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEWISE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    mapbox_access_token: Optional[str] = Field(
        default=None,
        description="Mapbox token used for directions and, when set, geocoding.",
    )
    mapbox_base_url: str = Field(default="https://api.mapbox.com")
    directions_profile: Literal["driving-traffic", "driving", "walking", "cycling"] = Field(
        default="driving-traffic",
        description="Mapbox Directions routing profile.",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoder_user_agent: str = Field(
        default="routewise_app",
        description="User agent sent to Nominatim when no Mapbox token is configured.",
    )
    # Mapbox Directions accepts at most 25 coordinates: start, end and 23 stops.
    max_stops: int = Field(default=23, ge=0)
    base_speed_mph: float = Field(default=30.0, gt=0.0)
    log_level: str = Field(default="INFO")


settings = Settings()
