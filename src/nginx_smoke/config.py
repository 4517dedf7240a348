"""Configuration management."""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Settings(BaseModel):
    """Smoke test settings loaded from environment variables."""

    # Target Configuration
    nginx_host: str = Field(default="nginx", min_length=1)
    http_port: int = 80
    https_port: int = 443
    error_port: int = 8080

    # Request Configuration
    request_timeout: Optional[float] = Field(default=None, gt=0)
    verify_tls: bool = False

    # Rate Limit Probe Configuration
    rate_limit_requests: int = Field(default=20, ge=1)
    rate_limit_interval: float = Field(default=0.01, ge=0)
    rate_limit_timeout: float = Field(default=2.0, gt=0)
    rate_limit_status: int = 503

    # Logging Configuration
    log_level: str = "WARNING"
    log_json: bool = False

    # Output Configuration
    report_format: str = "text"

    @field_validator("http_port", "https_port", "error_port")
    @classmethod
    def validate_port(cls, v):
        """Ports must be valid TCP port numbers."""
        if not (1 <= v <= 65535):
            raise ValueError(f"port must be between 1 and 65535, got {v}")
        return v

    @field_validator("rate_limit_status")
    @classmethod
    def validate_status_code(cls, v):
        """Rate limit status must be an HTTP status code."""
        if not (100 <= v <= 599):
            raise ValueError(f"rate_limit_status must be an HTTP status code, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("report_format")
    @classmethod
    def validate_report_format(cls, v):
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"report_format must be one of {valid_formats}")
        return v.lower()

    @property
    def http_url(self) -> str:
        return f"http://{self.nginx_host}:{self.http_port}/"

    @property
    def https_url(self) -> str:
        return f"https://{self.nginx_host}:{self.https_port}/"

    @property
    def error_url(self) -> str:
        return f"http://{self.nginx_host}:{self.error_port}/"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            nginx_host=cls._get_env_var("NGINX_HOST", "nginx"),
            http_port=int(cls._get_env_var("NGINX_HTTP_PORT", "80")),
            https_port=int(cls._get_env_var("NGINX_HTTPS_PORT", "443")),
            error_port=int(cls._get_env_var("NGINX_ERROR_PORT", "8080")),
            request_timeout=cls._optional_float("REQUEST_TIMEOUT"),
            verify_tls=cls._get_env_var("VERIFY_TLS", "false").lower() == "true",
            rate_limit_requests=int(cls._get_env_var("RATE_LIMIT_REQUESTS", "20")),
            rate_limit_interval=float(cls._get_env_var("RATE_LIMIT_INTERVAL", "0.01")),
            rate_limit_timeout=float(cls._get_env_var("RATE_LIMIT_TIMEOUT", "2.0")),
            rate_limit_status=int(cls._get_env_var("RATE_LIMIT_STATUS", "503")),
            log_level=cls._get_env_var("LOG_LEVEL", "WARNING"),
            log_json=cls._get_env_var("LOG_JSON", "false").lower() == "true",
            report_format=cls._get_env_var("REPORT_FORMAT", "text"),
        )

    @staticmethod
    def _get_env_var(name: str, default: Optional[str] = None) -> str:
        """Get environment variable with optional default."""
        value = os.getenv(name, default)
        if value is None:
            raise ValueError(f"Required environment variable {name} is not set")
        return value

    @staticmethod
    def _optional_float(name: str) -> Optional[float]:
        """Read a float environment variable; unset or empty means None."""
        value = os.getenv(name)
        if value is None or value.strip() == "":
            return None
        return float(value)


def get_settings() -> Settings:
    """Get smoke test settings instance."""
    return Settings.from_env()
