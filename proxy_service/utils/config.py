"""
Configuration Management
Environment-based configuration for the backend proxy gateway
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.get_logger(__name__)


class GatewayConfig(BaseSettings):
    """Gateway Configuration"""

    # Backend service
    backend_api_url: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("backend_api_url", "next_public_api_url"),
    )

    # Tunnel interstitial bypass, sent on every outbound call
    skip_warning_header: str = "ngrok-skip-browser-warning"
    skip_warning_value: str = "true"

    # Session cookie set by the login flow
    auth_cookie_name: str = "auth_token"

    # Outbound timeouts (seconds)
    default_timeout: float = 15.0
    connect_timeout: float = 5.0

    # Service info
    service_name: str = "proxy-gateway"
    service_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('backend_api_url')
    @classmethod
    def validate_backend_api_url(cls, v):
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError('Backend API URL must start with http:// or https://')
        return v

    @field_validator('default_timeout', 'connect_timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('Timeouts must be positive')
        return v

    @property
    def backend_base(self) -> str:
        """Backend base URL without trailing slashes"""
        return self.backend_api_url.rstrip('/')

    @property
    def media_base(self) -> str:
        """Backend base URL for media; the backend serves files over plain HTTP only"""
        base = self.backend_base
        if base.startswith("https://"):
            base = "http://" + base[len("https://"):]
        return base

    def log_config(self):
        """Log configuration"""
        logger.info(
            "Gateway configuration",
            backend=self.backend_base,
            media=self.media_base,
            default_timeout=self.default_timeout,
            environment=self.environment,
        )


def get_gateway_config() -> GatewayConfig:
    """
    Get gateway configuration.

    Built fresh on every call so the backend address is read from the
    environment once per request.
    """
    return GatewayConfig()
