"""
Service configuration.

Settings come from the environment (prefix ``DOCGEN_``) or a local ``.env``
file. ``PORT`` is honoured as well as ``DOCGEN_PORT`` so the service runs
unchanged on platforms that inject a bare port variable.
"""

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocxWatermarkStyle(BaseModel):
    """Appearance of the DOCX watermark shape."""

    font_family: str = "Calibri"
    font_size_pt: int = Field(default=72, ge=8, le=400)
    color: str = Field(default="#C0C0C0", description="VML fill colour (name or #RRGGBB)")
    opacity: float = Field(default=0.5, gt=0.0, le=1.0)
    rotation: int = Field(default=315, ge=0, lt=360, description="Degrees clockwise")


class Settings(BaseSettings):
    """Document generation service settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOCGEN_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    # === Server ===
    host: str = "127.0.0.1"
    port: int = Field(default=3000, validation_alias=AliasChoices("DOCGEN_PORT", "PORT", "port"))
    environment: str = Field(
        default="production",
        description="'development' adds stack traces to 5xx error bodies",
    )
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    max_body_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)

    # === Rendering ===
    max_concurrent_renders: int = Field(default=4, ge=1, le=32)
    render_timeout_seconds: float = Field(default=60.0, gt=0)
    browser_headless: bool = True
    browser_args: list[str] = ["--no-sandbox", "--disable-setuid-sandbox"]

    # === DOCX ===
    docx_page_numbers: bool = True
    docx_watermark: DocxWatermarkStyle = DocxWatermarkStyle()

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install explicit settings (tests, embedding)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


__all__ = [
    "DocxWatermarkStyle",
    "Settings",
    "get_settings",
    "init_settings",
    "reset_settings",
]
