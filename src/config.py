import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/133.0.0.0 Safari/537.36"
)

# Only the first page of visible reviews is ever extracted.
MAX_REVIEWS_LIMIT = 10


def clamp_max_reviews(value: int) -> int:
    return min(MAX_REVIEWS_LIMIT, max(1, int(value)))


class ExecutionEnvironment(str, Enum):
    LOCAL = "local"
    SERVERLESS = "serverless"


class Settings(BaseSettings):
    app_name: str = "Google Maps Review Scraper"
    app_env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_api_key", "vite_google_api_key"),
    )
    places_autocomplete_url: str = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
    places_timeout_s: float = 10.0
    maps_place_url_template: str = "https://www.google.com/maps/place/?q=place_id:{place_id}"

    # "auto" picks serverless when a Lambda/Vercel runtime is detected.
    scraper_execution_env: str = "auto"
    scraper_headless: bool = True
    scraper_executable_path: str = ""
    scraper_serverless_executable_path: str = "/opt/chromium/chromium"
    scraper_user_agent: str = DEFAULT_USER_AGENT
    scraper_viewport_width: int = 1366
    scraper_viewport_height: int = 768
    scraper_extra_chromium_args: Annotated[list[str], NoDecode] = Field(default_factory=list)
    scraper_navigation_timeout_ms: int = 30000
    scraper_settle_delay_ms: int = 3000
    scraper_consent_delay_ms: int = 1000
    scraper_reveal_delay_ms: int = 2000
    scraper_scroll_steps: int = 3
    scraper_scroll_step_px: int = 500
    scraper_scroll_delay_ms: int = 1000
    scraper_max_reviews: int = 10

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("scraper_extra_chromium_args", mode="before")
    @classmethod
    def parse_scraper_extra_chromium_args(cls, value: object) -> object:
        if isinstance(value, str):
            return [arg.strip() for arg in value.split(",") if arg.strip()]
        return value

    @field_validator("scraper_execution_env", mode="before")
    @classmethod
    def normalize_execution_env(cls, value: object) -> object:
        if value is None:
            return "auto"
        normalized = str(value).strip().lower()
        if normalized not in {"auto", "local", "serverless"}:
            raise ValueError(
                f"Unknown execution environment '{value}'. Supported: auto | local | serverless"
            )
        return normalized

    def resolve_execution_environment(self) -> ExecutionEnvironment:
        if self.scraper_execution_env == "serverless":
            return ExecutionEnvironment.SERVERLESS
        if self.scraper_execution_env == "local":
            return ExecutionEnvironment.LOCAL
        if os.environ.get("AWS_REGION") or os.environ.get("VERCEL") == "1":
            return ExecutionEnvironment.SERVERLESS
        return ExecutionEnvironment.LOCAL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@dataclass(frozen=True)
class ScraperConfig:
    """Everything the scraping pipeline needs, resolved up front.

    The pipeline only ever sees this object, so tests can build one directly
    instead of patching process environment.
    """

    execution_environment: ExecutionEnvironment = ExecutionEnvironment.LOCAL
    headless: bool = True
    executable_path: str = ""
    serverless_executable_path: str = "/opt/chromium/chromium"
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1366
    viewport_height: int = 768
    extra_chromium_args: tuple[str, ...] = field(default_factory=tuple)
    navigation_timeout_ms: int = 30000
    settle_delay_ms: int = 3000
    consent_delay_ms: int = 1000
    reveal_delay_ms: int = 2000
    scroll_steps: int = 3
    scroll_step_px: int = 500
    scroll_delay_ms: int = 1000
    max_reviews: int = 10
    place_url_template: str = "https://www.google.com/maps/place/?q=place_id:{place_id}"

    @classmethod
    def from_settings(cls, source: Settings) -> "ScraperConfig":
        return cls(
            execution_environment=source.resolve_execution_environment(),
            headless=source.scraper_headless,
            executable_path=source.scraper_executable_path.strip(),
            serverless_executable_path=source.scraper_serverless_executable_path.strip(),
            user_agent=source.scraper_user_agent,
            viewport_width=source.scraper_viewport_width,
            viewport_height=source.scraper_viewport_height,
            extra_chromium_args=tuple(source.scraper_extra_chromium_args),
            navigation_timeout_ms=source.scraper_navigation_timeout_ms,
            settle_delay_ms=source.scraper_settle_delay_ms,
            consent_delay_ms=source.scraper_consent_delay_ms,
            reveal_delay_ms=source.scraper_reveal_delay_ms,
            scroll_steps=source.scraper_scroll_steps,
            scroll_step_px=source.scraper_scroll_step_px,
            scroll_delay_ms=source.scraper_scroll_delay_ms,
            max_reviews=clamp_max_reviews(source.scraper_max_reviews),
            place_url_template=source.maps_place_url_template,
        )


settings = Settings()
