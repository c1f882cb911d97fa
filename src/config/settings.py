"""
Runtime settings for the Command API.

Settings are read from environment variables once at startup (see the app
lifespan hook) and handed to the store factories. Unset variables fall back
to the defaults in ``src.config.constants``.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from src.config.constants import (
    COMMAND_STORE_TYPE,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_COMMANDS_PREFIX,
    DEFAULT_CORS_ALLOW_ORIGINS,
    DEFAULT_S3_BUCKET,
    DEFAULT_S3_ENDPOINT,
    STORAGE_PROVIDER_TYPE,
)


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the service configuration."""

    # Which CommandStore backs the repository ('memory' or 'storage')
    command_store_type: str = COMMAND_STORE_TYPE

    # Object storage provider for the 'storage' command store ('memory' or 'minio')
    storage_type: str = STORAGE_PROVIDER_TYPE

    # Key prefix under which command documents are written
    commands_prefix: str = DEFAULT_COMMANDS_PREFIX

    # S3-compatible storage settings (only used when storage_type is 'minio')
    s3_bucket: str = DEFAULT_S3_BUCKET
    s3_endpoint: str = DEFAULT_S3_ENDPOINT
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_secure: bool = True

    cors_allow_origins: List[str] = field(
        default_factory=lambda: list(DEFAULT_CORS_ALLOW_ORIGINS)
    )

    # Bind address for scripts/serve.py
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Settings instance
        """
        env = os.environ if environ is None else environ

        origins = env.get("CORS_ALLOW_ORIGINS")
        cors_allow_origins = (
            [origin.strip() for origin in origins.split(",") if origin.strip()]
            if origins
            else list(DEFAULT_CORS_ALLOW_ORIGINS)
        )

        return cls(
            command_store_type=env.get("COMMAND_STORE_TYPE", COMMAND_STORE_TYPE),
            storage_type=env.get("STORAGE_TYPE", STORAGE_PROVIDER_TYPE),
            commands_prefix=env.get("COMMANDS_PREFIX", DEFAULT_COMMANDS_PREFIX),
            s3_bucket=env.get("S3_BUCKET") or DEFAULT_S3_BUCKET,
            s3_endpoint=env.get("S3_ENDPOINT") or DEFAULT_S3_ENDPOINT,
            s3_access_key=env.get("S3_ACCESS_KEY_ID"),
            s3_secret_key=env.get("S3_SECRET_ACCESS_KEY"),
            s3_secure=(env.get("S3_SECURE") or "True").lower() == "true",
            cors_allow_origins=cors_allow_origins,
            api_host=env.get("API_HOST") or DEFAULT_API_HOST,
            api_port=int(env.get("API_PORT") or DEFAULT_API_PORT),
        )

    def storage_config(self) -> Dict[str, Any]:
        """Keyword arguments for ``get_storage`` matching ``storage_type``"""
        if self.storage_type.lower() == "minio":
            protocol = "https" if self.s3_secure else "http"
            return {
                "bucket_name": self.s3_bucket,
                "endpoint": self.s3_endpoint,
                "access_key": self.s3_access_key,
                "secret_key": self.s3_secret_key,
                "secure": self.s3_secure,
                "base_url": f"{protocol}://{self.s3_endpoint}/{self.s3_bucket}",
            }
        return {"base_url": "memory://commands"}
