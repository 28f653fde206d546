"""Configuration management for the portfolio engine."""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Only edge builders (``ScoringConfig.from_settings``,
    ``ValueEstimateOptions.from_settings``) read these. Scoring and value
    functions receive their configuration as explicit arguments.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENGINE_ENV: str = Field(default="dev", description="Environment: dev, test, staging, prod")

    # Scoring
    SCORING_THRESHOLD: float = Field(
        default=2.5, ge=0.0, le=5.0, description="Quadrant midpoint on the 0-5 scale"
    )
    LEVER_SCORE_POLICY: Literal["strict", "relaxed"] = Field(
        default="strict", description="strict: levers in [1,5], relaxed: levers in [0,5]"
    )

    # Value estimation
    DEFAULT_CURRENCY: str = Field(default="GBP", description="Currency code for value estimates")
    DEFAULT_HOURLY_RATE: Optional[float] = Field(
        default=None, gt=0, description="Hourly rate override (defaults to the currency's rate)"
    )
    VALUE_VOLUME_MULTIPLIER: float = Field(
        default=1000, gt=0, description="Annual transaction volume for monetary benchmarks"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    return Settings()
