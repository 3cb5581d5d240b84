"""Configuration management for the Nexus client"""

import os
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from nexus_client.shared.exceptions import ConfigurationError


class Environment(str, Enum):
    """Built-in platform environments"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class StorageProvider(str, Enum):
    """Storage backend hint forwarded to the platform"""

    GOOGLE = "google"
    LOCAL = "local"
    CUSTOM = "custom"


DEFAULT_API_URLS: dict[Environment, str] = {
    Environment.PRODUCTION: "https://api.neuralnexus.ai/v1",
    Environment.DEVELOPMENT: "https://api.dev.neuralnexus.ai/v1",
}

DEFAULT_TIMEOUT_MS = 30_000

# API key prefix -> key type
API_KEY_PREFIXES: dict[str, str] = {
    "nxt_": "test",
    "nnd_": "development",
    "ntr_": "training",
    "ndp_": "deployment",
    "npr_": "production",
}


def default_api_url(environment: Environment) -> str:
    """Get the base endpoint for a built-in environment"""
    return DEFAULT_API_URLS[environment]


def detect_key_type(api_key: str) -> str | None:
    """Detect the API key type from its prefix

    Args:
        api_key: Raw API key

    Returns:
        Key type name, or None when the prefix is not recognised
    """
    key_type = API_KEY_PREFIXES.get(api_key[:4])
    if key_type is None:
        logger.warning(
            "API key format doesn't match expected pattern. "
            "This may cause authentication issues."
        )
    return key_type


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Mask a secret for logging, keeping only its prefix visible"""
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}***"


@dataclass
class ClientConfig:
    """Configuration for a Nexus client instance

    Required:
        api_key: Long-lived API credential
        environment: One of Environment (string values accepted)

    Optional:
        api_url: Endpoint override, derived from environment when omitted
        timeout_ms: Request timeout in milliseconds
        storage_provider: Storage backend hint
    """

    api_key: str
    environment: Environment | str
    api_url: str | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    storage_provider: StorageProvider | str = StorageProvider.GOOGLE
    key_type: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "API key is required to initialize the Nexus client",
                "INVALID_CONFIG",
            )

        if not self.environment:
            raise ConfigurationError(
                "Environment (production or development) must be specified",
                "INVALID_CONFIG",
            )

        try:
            self.environment = Environment(self.environment)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown environment: {self.environment!r}",
                "INVALID_CONFIG",
                details={"allowed": [env.value for env in Environment]},
            ) from e

        try:
            self.storage_provider = StorageProvider(
                self.storage_provider or StorageProvider.GOOGLE
            )
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown storage provider: {self.storage_provider!r}",
                "INVALID_CONFIG",
                details={"allowed": [p.value for p in StorageProvider]},
            ) from e

        if not self.timeout_ms:
            self.timeout_ms = DEFAULT_TIMEOUT_MS
        elif self.timeout_ms < 0:
            raise ConfigurationError(
                f"timeout_ms must be positive, got {self.timeout_ms}",
                "INVALID_CONFIG",
            )

        self.api_url = self.api_url or default_api_url(self.environment)
        self.key_type = detect_key_type(self.api_key)

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted for httpx"""
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables

        Reads NEXUS_API_KEY, NEXUS_ENVIRONMENT, NEXUS_API_URL,
        NEXUS_TIMEOUT_MS and NEXUS_STORAGE_PROVIDER.

        Returns:
            ClientConfig instance with values from environment

        Raises:
            ConfigurationError: If required variables are missing or invalid
        """
        timeout_raw = os.getenv("NEXUS_TIMEOUT_MS")
        try:
            timeout_ms = int(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_MS
        except ValueError as e:
            raise ConfigurationError(
                f"NEXUS_TIMEOUT_MS must be an integer, got {timeout_raw!r}",
                "INVALID_CONFIG",
            ) from e

        config = cls(
            api_key=os.getenv("NEXUS_API_KEY", ""),
            environment=os.getenv("NEXUS_ENVIRONMENT", ""),
            api_url=os.getenv("NEXUS_API_URL") or None,
            timeout_ms=timeout_ms,
            storage_provider=os.getenv(
                "NEXUS_STORAGE_PROVIDER", StorageProvider.GOOGLE.value
            ),
        )

        logger.info("Configuration loaded:")
        logger.info(f"  API Key: {mask_secret(config.api_key)}")
        logger.info(f"  Key Type: {config.key_type or 'unknown'}")
        logger.info(f"  Environment: {config.environment.value}")
        logger.info(f"  API URL: {config.api_url}")
        logger.info(f"  Timeout: {config.timeout_ms} ms")
        logger.info(f"  Storage Provider: {config.storage_provider.value}")

        return config
