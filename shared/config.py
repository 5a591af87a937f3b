"""
Shared configuration management for the merchant API client.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MerchantAPISettings(BaseSettings):
    """Settings consumed by the credential store, invoker and domain clients."""

    model_config = SettingsConfigDict(
        env_prefix="MERCHANT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Application identifiers
    app_id: str = Field(default="")
    app_secret: str = Field(default="")

    # Upstream prefixes
    api_prefix: str = Field(default="https://api.weixin.qq.com/cgi-bin/")
    merchant_prefix: str = Field(default="https://api.weixin.qq.com/merchant/")

    # Credential handling
    credential_safety_margin_seconds: int = Field(default=300, ge=0)

    # Timeouts
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    token_timeout_seconds: float = Field(default=10.0, gt=0)

    # Opt-in transport retry (1 = disabled)
    transport_max_attempts: int = Field(default=1, ge=1, le=10)
    transport_retry_base_delay: float = Field(default=0.5, ge=0)

    user_agent: Optional[str] = Field(default="merchant-api-client/0.1")


def get_settings(**overrides) -> MerchantAPISettings:
    """Build settings from the environment, applying explicit overrides."""
    return MerchantAPISettings(**overrides)
