"""Configuration management."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


class Settings(BaseModel):
    """Application settings."""

    # Map data (OpenStreetMap Overpass)
    overpass_url: str = Field(
        default_factory=lambda: os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
    )
    overpass_timeout: float = Field(
        default_factory=lambda: float(os.getenv("OVERPASS_TIMEOUT", "30"))
    )
    overpass_max_retries: int = Field(
        default_factory=lambda: int(os.getenv("OVERPASS_MAX_RETRIES", "2"))
    )
    waypoint_timeout: float = Field(
        default_factory=lambda: float(os.getenv("WAYPOINT_TIMEOUT", "20"))
    )

    # Geocoding
    nominatim_url: str = Field(
        default_factory=lambda: os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
    )

    # Search radii in meters
    nearby_radius_m: float = Field(
        default_factory=lambda: float(os.getenv("NEARBY_RADIUS_M", "2000"))
    )
    search_radius_m: float = Field(
        default_factory=lambda: float(os.getenv("SEARCH_RADIUS_M", "5000"))
    )

    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING")
    )

    # Output settings
    output_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("OUTPUT_DIR", str(Path(__file__).parent.parent / "output")))
    )

    def validate_required(self) -> list[str]:
        """Check for unusable configuration values."""
        problems = []

        if self.overpass_timeout <= 0:
            problems.append("OVERPASS_TIMEOUT must be positive")
        if self.waypoint_timeout <= 0:
            problems.append("WAYPOINT_TIMEOUT must be positive")
        if self.overpass_max_retries < 1:
            problems.append("OVERPASS_MAX_RETRIES must be at least 1")

        return problems


# Global settings instance
settings = Settings()
