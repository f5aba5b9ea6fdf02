"""
Configuration Module for the Bone Strength Service

This module defines the configuration system for the bone strength web application,
using Pydantic for settings validation and dependency injection through AppKeys.

The configuration follows these principles:
1. Environment-based configuration, with required OAuth client credentials
2. Strong validation and typing through Pydantic
3. Dependency injection pattern using aiohttp's app context
4. Settings are immutable once loaded

The Settings class is loaded once at startup. If any required value is missing, Pydantic
raises a ValidationError and the process exits before serving any request. All request
handlers access settings and shared resources through typed AppKeys rather than module
globals.

Key configuration areas include:
- OAuth client credentials and provider location
- Session cookie signing and naming
- Networking and static assets
- Monitoring and observability
"""

import asyncio
import logging
import os
from typing import Final, Optional
from urllib.parse import urlencode

from aiohttp import ClientSession, web
from cryptography.fernet import Fernet
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bonestrength.app.metrics import MetricsClient
from bonestrength.model.genotype import GENOTYPE_LOCATIONS
from bonestrength.model.health import HealthGauge


logger = logging.getLogger(__name__)

BASE_SCOPES = ("basic", "names")
"""Non-genetic scopes requested alongside the genotype locations."""

DEFAULT_STATIC_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "static")


class Settings(BaseSettings):
    """
    Application settings for the bone strength service.

    Values are read from environment variables. The OAuth client credentials, the redirect
    URI and the cookie secret have no defaults: a deployment that does not provide them
    fails validation at startup.

    The OAuth scope string is derived from the fixed base scopes and the genotype locations
    needed for scoring. It is exposed as a property so that the consent redirect and the
    token exchange always send the same value.
    """

    model_config = SettingsConfigDict(frozen=True)

    # OAuth client settings
    client_id: str
    """
    OAuth client identifier issued by the genetic data provider.
    Set with CLIENT_ID environment variable.
    """

    client_secret: str
    """
    OAuth client secret issued by the genetic data provider. Never logged.
    Set with CLIENT_SECRET environment variable.
    """

    redirect_uri: str
    """
    Callback URL registered with the provider, normally ending in /receive_code/.
    Set with REDIRECT_URI environment variable.
    """

    api_uri: str = "https://api.23andme.com"
    """
    Base URI of the provider, used for the consent screen, token endpoint and data API.
    Set with API_URI environment variable.
    """

    # Session settings
    cookie_secret: Fernet
    """
    Fernet key used to encrypt and sign the session cookie.
    Can be set to a Fernet object or a url-safe base64-encoded 32 byte key.
    Set with COOKIE_SECRET environment variable.
    """

    session_name: str = "bonestrength_session"
    """
    Name of the session cookie.
    Set with SESSION_NAME environment variable.
    """

    session_access_token_key: str = "access_token"
    """
    Key under which the access token is stored inside the session.
    Set with SESSION_ACCESS_TOKEN_KEY environment variable.
    """

    # Network settings
    http_port: int = Field(alias="port", default=5000)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    static_path: str = DEFAULT_STATIC_PATH
    """
    Directory served under /static/.
    Set with STATIC_PATH environment variable.
    """

    debug: bool = False
    """
    Enable request tracing for outbound calls and verbose error pages.
    Set with DEBUG=true environment variable.
    """

    # Monitoring and error reporting
    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    metrics_backend: str = "none"
    """
    Metrics backend, either "telegraf" or "none".
    Set with METRICS_BACKEND environment variable.
    """

    statsd_host: str = Field(alias="TELEGRAF_HOST", default="telegraf")
    """
    StatsD/Telegraf host for metrics collection.
    Set with TELEGRAF_HOST environment variable.
    """

    statsd_port: int = Field(alias="TELEGRAF_PORT", default=8125)
    """
    StatsD/Telegraf port for metrics collection.
    Set with TELEGRAF_PORT environment variable.
    """

    statsd_prefix: str = "bonestrength"
    """Prefix for all StatsD metrics from this service."""

    @field_validator("api_uri")
    @classmethod
    def strip_api_uri(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("cookie_secret", mode="before")
    @classmethod
    def decode_cookie_secret(cls, v) -> Fernet:
        """
        Validate and process the cookie_secret setting.

        This validator accepts either:
        - An existing Fernet object (for programmatic configuration)
        - A url-safe base64-encoded string containing a Fernet key

        Raises:
            ValueError: If the input is neither a Fernet object nor a valid key
        """
        if isinstance(v, Fernet):
            return v
        elif isinstance(v, (str, bytes)):
            try:
                return Fernet(v)
            except ValueError as e:
                raise ValueError("cookie_secret is not a valid Fernet key") from e
        raise ValueError(
            "cookie_secret must be a Fernet object or a base64-encoded key string"
        )

    @field_validator("metrics_backend")
    @classmethod
    def check_metrics_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("telegraf", "none"):
            raise ValueError("metrics_backend must be 'telegraf' or 'none'")
        return v

    @property
    def scope(self) -> str:
        """Space separated scope string for both the consent screen and the token exchange."""
        return " ".join(BASE_SCOPES + GENOTYPE_LOCATIONS)

    @property
    def genotype_locations(self) -> str:
        """Genotype locations, already encoded for the genotype endpoint query string."""
        return "%20".join(GENOTYPE_LOCATIONS)

    @property
    def token_url(self) -> str:
        return f"{self.api_uri}/token/"

    @property
    def authorize_url(self) -> str:
        """Fully built consent screen URL for this client."""
        query = urlencode(
            {
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
                "client_id": self.client_id,
                "scope": self.scope,
            }
        )
        return f"{self.api_uri}/authorize/?{query}"


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

SessionAppKey: Final = web.AppKey("http_session", ClientSession)
"""AppKey for accessing the shared aiohttp client session"""

HealthGaugeAppKey: Final = web.AppKey("health_gauge", HealthGauge)
"""AppKey for accessing the health monitoring gauge"""

MetricsClientAppKey: Final = web.AppKey("metrics_client", MetricsClient)
"""AppKey for the metrics client"""

TickHealthTaskAppKey: Final = web.AppKey("tick_health_task", asyncio.Task[None])
"""AppKey for the background task that monitors service health"""
