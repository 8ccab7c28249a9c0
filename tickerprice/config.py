"""Configuration management for tickerprice."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings, overridable through TICKERPRICE_* variables."""
    
    model_config = SettingsConfigDict(
        env_prefix="TICKERPRICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    
    # HTTP
    user_agent: str = Field(default=BROWSER_USER_AGENT, description="Browser User-Agent header")
    us_timeout_seconds: float = Field(default=10.0, description="Yahoo Finance request timeout")
    il_timeout_seconds: float = Field(default=10.0, description="Israeli sources request timeout")
    probe_timeout_seconds: float = Field(default=5.0, description="TASE API probe request timeout")
    max_redirects: int = Field(default=5, description="Redirects followed by the Bizportal fallback")
    
    # Sources
    yahoo_chart_url: str = Field(
        default="https://query2.finance.yahoo.com/v8/finance/chart/{ticker}",
        description="Yahoo Finance chart endpoint",
    )
    themarker_url: str = Field(
        default="https://finance.themarker.com/mtf/{ticker}",
        description="TheMarker Finance security page (primary Israeli source)",
    )
    bizportal_url: str = Field(
        default="https://www.bizportal.co.il/capitalmarket/quote/generalview/{ticker}",
        description="Bizportal security page (fallback Israeli source)",
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
