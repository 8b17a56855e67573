from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Upstream routing-data API
    bgpview_base_url: str = Field(
        default="https://api.bgpview.io",
        alias="BGPVIEW_BASE_URL",
    )
    http_timeout: float = Field(default=8.0, alias="HTTP_TIMEOUT")
    bgpview_max_attempts: int = Field(default=3, alias="BGPVIEW_MAX_ATTEMPTS")
    user_agent: str = Field(
        default="ipv6request/0.1 (+https://stats.ipv6.army)",
        alias="USER_AGENT",
    )

    # Cache lifetimes (seconds)
    ip_cache_ttl: int = Field(default=1800, alias="IP_CACHE_TTL")
    prefix_cache_ttl: int = Field(default=3600, alias="PREFIX_CACHE_TTL")
    details_cache_ttl: int = Field(default=7200, alias="DETAILS_CACHE_TTL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    shutdown_grace_seconds: int = Field(
        default=5,
        alias="SHUTDOWN_GRACE_SECONDS",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def recommended_warnings(self) -> List[str]:
        warnings: List[str] = []
        if self.bgpview_max_attempts < 1:
            warnings.append(
                (
                    "BGPVIEW_MAX_ATTEMPTS="
                    f"{self.bgpview_max_attempts}; at least one attempt "
                    "is always made."
                )
            )
        if self.http_timeout > 30:
            warnings.append(
                (
                    f"HTTP_TIMEOUT={self.http_timeout} is high; a lookup can "
                    "block a request for several times this value."
                )
            )
        if not self.bgpview_base_url.startswith("https://"):
            warnings.append(
                "BGPVIEW_BASE_URL is not served over HTTPS."
            )
        return warnings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


def reset_settings_cache() -> None:
    """Clear cached settings (intended for test usage)."""
    get_settings.cache_clear()
