"""Configuration settings for the place aggregator.

This module defines the configuration settings for the aggregator, including the
upstream provider endpoints, pipeline tolerances, the HTTP API and logging. It uses
Pydantic's BaseSettings for environment variable management.
"""

from functools import lru_cache

from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceSettings(BaseModel):
    """Connection details for the upstream geodata providers.

    Attributes:
        overpass_url: Overpass interpreter endpoint.
        opendata_base_url: Base URL of the open-data catalog API.
        geoapify_url: Geoapify places endpoint.
        geoapify_api_key: API key sent to Geoapify.
        area_name: Named area the Overpass queries are restricted to.
        center_lat: Latitude of the Geoapify circle filter.
        center_lng: Longitude of the Geoapify circle filter.
        radius_m: Radius of the Geoapify circle filter in meters.
        record_limit: Page size requested from the catalog and Geoapify.
        timeout: Request timeout in seconds.
        user_agent: User-Agent string to use for requests.
    """

    overpass_url: str = Field(
        "https://overpass-api.de/api/interpreter", description="Overpass interpreter URL"
    )
    opendata_base_url: str = Field(
        "https://opendata.paris.fr/api/v2", description="Open-data catalog base URL"
    )
    geoapify_url: str = Field(
        "https://api.geoapify.com/v2/places", description="Geoapify places URL"
    )
    geoapify_api_key: str = Field("", description="Geoapify API key")
    area_name: str = Field("Paris", description="Overpass search area name")
    # Centre of Paris, matches the default Overpass area.
    center_lat: float = Field(48.8566, ge=-90.0, le=90.0, description="Circle filter latitude")
    center_lng: float = Field(2.3522, ge=-180.0, le=180.0, description="Circle filter longitude")
    radius_m: int = Field(5000, gt=0, description="Circle filter radius in meters")
    record_limit: int = Field(10, gt=0, description="Records requested per source")
    timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field("place-aggregator/0.1", description="User-Agent string")

    @computed_field
    def headers(self) -> dict[str, str]:
        """Return the headers shared by every outbound request.

        Returns:
            A dictionary containing the HTTP headers to be used in provider requests.
        """
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
        }


class PipelineSettings(BaseModel):
    """Settings for the aggregation pipeline.

    Attributes:
        duplicate_tolerance: Degree tolerance under which two places are duplicates.
        default_category: Category used when the caller gives none.
    """

    duplicate_tolerance: float = Field(
        0.0001, gt=0, description="Near-duplicate tolerance in degrees"
    )
    default_category: str = Field("restaurant", description="Default category")


class ApiSettings(BaseModel):
    """Settings for the HTTP API.

    Attributes:
        title: Title shown in the OpenAPI schema.
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
    """

    title: str = Field("Place Aggregator API", description="API title")
    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(3000, description="Listen port")


class LoggingSettings(BaseModel):
    """Logging configuration settings.

    Attributes:
        level: The logging level (e.g., INFO, DEBUG).
        format: The log message format string.
    """

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )


class Settings(BaseSettings):
    """Global application settings.

    This class loads settings from environment variables and provides a structured
    access to them.

    Attributes:
        sources: Upstream provider settings.
        pipeline: Aggregation pipeline settings.
        api: HTTP API settings.
        logging: Logging configuration settings.
    """

    sources: SourceSettings = Field(default_factory=SourceSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the settings.

    This function returns a singleton instance of the Settings class, cached
    using lru_cache to avoid reloading environment variables on every call.

    Returns:
        The global Settings instance.
    """
    return Settings()
