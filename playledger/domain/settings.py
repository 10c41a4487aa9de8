"""Application settings with Pydantic validation.

Settings are stored as JSON and validated using Pydantic models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ApiSettings(BaseModel):
    """REST backend configuration."""

    base_url: str = Field(default="http://localhost:8080/api", min_length=1)
    # None = wait indefinitely (no timeout at the controller layer)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)

    model_config = {"validate_assignment": True}


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    model_config = {"validate_assignment": True}


class UIStateSettings(BaseModel):
    """UI state to persist across sessions."""

    window_width: int = Field(default=1100, ge=600, le=4000)
    window_height: int = Field(default=750, ge=400, le=3000)

    model_config = {"validate_assignment": True}


class AppSettings(BaseModel):
    """Application settings with validation.

    Example:
        >>> settings = AppSettings()
        >>> settings.api.base_url = "https://lounge.example.com/api"
        >>> settings.logging.level = "DEBUG"
    """

    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ui_state: UIStateSettings = Field(default_factory=UIStateSettings)

    model_config = {"validate_assignment": True}
