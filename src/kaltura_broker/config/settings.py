"""Application settings and configuration management."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kaltura_broker.config.cfenv import database_url_from_vcap

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_URL = "sqlite+aiosqlite:///./kaltura_broker.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Broker API Configuration
    broker_user: str = Field(
        default="",
        description="Username for HTTP basic authentication on broker endpoints",
    )
    broker_pass: str = Field(
        default="",
        description="Password for HTTP basic authentication on broker endpoints",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=8080,
        description="Server port",
    )

    # Catalog Configuration
    catalog_service_id: str = Field(
        default="5f2e9a6c-3d0b-4a7e-9c41-8b6f2d1e0a73",
        description="Service ID advertised in the broker catalog",
    )
    catalog_plan_id: str = Field(
        default="b0d7c4e1-62a9-4f35-8e1d-97a3c5f4b218",
        description="Plan ID advertised in the broker catalog",
    )
    dashboard_url: str = Field(
        default="https://kmc.kaltura.com/index.php/kmcng/login",
        description="Dashboard URL returned for provisioned instances",
    )

    # Kaltura Partner Registration
    partner_registration_url: str = Field(
        default="https://www.kaltura.com/api_v3/service/partner/action/register",
        description="Kaltura partner registration endpoint",
    )
    partner_description: str = Field(
        default="SAP Cloud Platform provisioned",
        description="Description attached to partners created by the broker",
    )
    partner_request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for the partner registration request",
    )

    # Database Configuration
    database_url: str | None = Field(
        default=None,
        description="Database connection URL (discovered from VCAP_SERVICES when unset)",
    )
    database_service_label: str = Field(
        default="postgresql",
        description="Cloud Foundry service label of the bound database",
    )
    vcap_services: str | None = Field(
        default=None,
        description="Cloud Foundry VCAP_SERVICES JSON document",
    )
    database_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    database_pool_max_overflow: int = Field(
        default=10,
        description="Maximum connections above the pool size",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format",
    )

    # Development Settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # OpenTelemetry Configuration
    otel_enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing",
    )
    otel_service_name: str = Field(
        default="kaltura-broker",
        description="Service name for OpenTelemetry traces",
    )
    otel_exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    otel_exporter_otlp_http_endpoint: str = Field(
        default="http://localhost:4318",
        description="OTLP exporter endpoint (HTTP)",
    )
    otel_exporter_type: Literal["otlp", "otlp-http", "console"] = Field(
        default="otlp",
        description="Telemetry exporter type",
    )
    otel_traces_sampler: Literal[
        "always_on",
        "always_off",
        "traceidratio",
        "parentbased_always_on",
        "parentbased_always_off",
        "parentbased_traceidratio",
    ] = Field(
        default="always_on",
        description="Trace sampling strategy",
    )
    otel_traces_sampler_arg: float = Field(
        default=1.0,
        description="Sampler argument (e.g., ratio for traceidratio)",
    )

    def resolve_database_url(self) -> str:
        """Resolve the database URL to connect to.

        An explicit DATABASE_URL wins. Otherwise the database bound to the
        application through VCAP_SERVICES is used, and local development
        falls back to a SQLite file.

        Returns:
            SQLAlchemy async database URL.

        Raises:
            ServiceDiscoveryError: If VCAP_SERVICES does not contain exactly
                one service with the configured label.
        """
        if self.database_url:
            return self.database_url
        if self.vcap_services:
            return database_url_from_vcap(self.vcap_services, self.database_service_label)
        logger.warning(
            "No DATABASE_URL or VCAP_SERVICES found, using %s", DEFAULT_SQLITE_URL
        )
        return DEFAULT_SQLITE_URL


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
