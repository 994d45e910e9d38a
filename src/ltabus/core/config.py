from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATAMALL_BASE_URL = "https://datamall2.mytransport.sg/ltaodataservice"


class Settings(BaseSettings):
    """Application runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    env: str = Field(default="dev", validation_alias="ENV")
    api_title: str = Field(default="LTA Bus Backend", validation_alias="API_TITLE")
    lta_api_key: str | None = Field(default=None, validation_alias="LTA_API_KEY")
    stops_url_template: str = Field(
        default=f"{DATAMALL_BASE_URL}/BusStops?$skip={{skip}}",
        validation_alias="STOPS_URL_TEMPLATE",
    )
    routes_url_template: str = Field(
        default=f"{DATAMALL_BASE_URL}/BusRoutes?$skip={{skip}}",
        validation_alias="ROUTES_URL_TEMPLATE",
    )
    arrivals_url: str = Field(
        default=f"{DATAMALL_BASE_URL}/v3/BusArrival",
        validation_alias="ARRIVALS_URL",
    )
    http_timeout_seconds: float = Field(default=8.0, validation_alias="HTTP_TIMEOUT_SECONDS")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    request_id_header: str = Field(default="X-Request-ID")
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    @property
    def allowed_origins(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
