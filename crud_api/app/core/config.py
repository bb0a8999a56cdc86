"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields and some
of them depend on the deployment environment selected with
``APP_ENV`` (``development``, ``production`` or ``test``), mirroring
the per‑environment presets the service has always shipped with:
looser rate limits and a wildcard CORS policy for tests, stricter
limits in production.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List


ENVIRONMENTS = ("development", "production", "test")

# Per‑environment presets.  Any value can still be overridden through
# its own environment variable.
_PRESETS: Dict[str, Dict[str, str]] = {
    "development": {
        "PORT": "3000",
        "CORS_ALLOWED_ORIGINS": "http://localhost:3000,http://localhost:3001",
        "RATE_LIMIT_WINDOW_SECONDS": str(15 * 60),
        "RATE_LIMIT_MAX": "100",
        "RATE_LIMIT_STRICT_MAX": "20",
    },
    "production": {
        "PORT": "8080",
        "CORS_ALLOWED_ORIGINS": "",
        "RATE_LIMIT_WINDOW_SECONDS": str(15 * 60),
        "RATE_LIMIT_MAX": "50",
        "RATE_LIMIT_STRICT_MAX": "20",
    },
    "test": {
        "PORT": "3001",
        "CORS_ALLOWED_ORIGINS": "*",
        "RATE_LIMIT_WINDOW_SECONDS": "60",
        "RATE_LIMIT_MAX": "1000",
        "RATE_LIMIT_STRICT_MAX": "1000",
    },
}


def current_environment() -> str:
    """Return the active environment name, falling back to development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return env if env in ENVIRONMENTS else "development"


def _env(name: str) -> str:
    return os.getenv(name, _PRESETS[current_environment()][name])


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read when the instance is created, so tests can tweak the
    environment and build a fresh ``Settings()`` without reloading the
    module.
    """

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Express CRUD API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    description: str = field(
        default_factory=lambda: os.getenv(
            "API_DESCRIPTION", "RESTful API with CRUD operations for user management"
        )
    )
    environment: str = field(default_factory=current_environment)
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # Comma‑separated list of origins allowed by the CORS middleware.
    # ``*`` allows any origin (used by the test preset).
    cors_allowed_origins: str = field(default_factory=lambda: _env("CORS_ALLOWED_ORIGINS"))

    # Fixed‑window rate limiting.  ``rate_limit_max`` applies to read
    # endpoints, ``rate_limit_strict_max`` to create/update/delete.
    rate_limit_window_seconds: int = field(default_factory=lambda: int(_env("RATE_LIMIT_WINDOW_SECONDS")))
    rate_limit_max: int = field(default_factory=lambda: int(_env("RATE_LIMIT_MAX")))
    rate_limit_strict_max: int = field(default_factory=lambda: int(_env("RATE_LIMIT_STRICT_MAX")))

    # Requests announcing a larger body are refused with 413.
    max_body_bytes: int = field(default_factory=lambda: int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024))))

    @property
    def debug(self) -> bool:
        """Internal error details are exposed only in development."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
