"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GREENROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "GreenRoute Optimization API"
    api_prefix: str = "/api"
    average_speed_mph: float = Field(
        default=30.0,
        gt=0.0,
        description="Assumed average driving speed used to turn miles into minutes.",
    )
    travel_buffer_minutes: float = Field(
        default=15.0,
        ge=0.0,
        description="Travel allowance added to every stop when summarizing a day's route.",
    )
    fuel_gallons_per_mile: float = Field(default=0.1, ge=0.0)
    default_job_duration_minutes: float = Field(default=60.0, ge=0.0)
    max_route_stops: int = Field(
        default=50,
        ge=1,
        description="Largest number of stops accepted in a single optimization request.",
    )
    max_optimization_passes: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on 2-opt passes. Leave unset to run until no swap improves the route.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    jobs_table: str = "jobs"
    gps_table: str = "gps_tracking"

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
