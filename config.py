"""
Suite configuration module.

This module defines configuration classes for the target environments
(dev, staging, prod) and resolves which Chevrolet storefront (parts or
accessories) a run targets. Values are loaded from environment variables
with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

ENVIRONMENTS = ("dev", "staging", "prod")
SITES = ("parts", "accessories")

BASE_URLS: dict[str, str] = {
    "parts": "https://parts.chevrolet.com/",
    "accessories": "https://accessories.chevrolet.com/",
}

# Every environment currently points at the production storefronts.
SITE_CONFIG: dict[str, dict[str, str]] = {
    "dev": BASE_URLS,
    "staging": BASE_URLS,
    "prod": BASE_URLS,
}


class Config:
    """Base configuration with default settings."""

    ENV: str = "prod"

    VIEWPORT: dict = {"width": 1280, "height": 800}
    HEADLESS: bool = os.environ.get("HEADLESS", "true").lower() != "false"

    # San Francisco; the storefronts use it to pick a dealer.
    GEOLOCATION: dict = {"latitude": 37.7749, "longitude": -122.4194}
    PERMISSIONS: list = ["geolocation"]

    TEST_TIMEOUT_MS: int = 90_000
    ACTION_TIMEOUT_MS: int = 15_000

    DATA_DIR: Path = BASE_DIR / "data"
    CREDENTIALS_FILE: Path = Path(
        os.environ.get("CREDENTIALS_FILE", DATA_DIR / "credentials.json")
    )
    VEHICLES_FILE: Path = Path(
        os.environ.get("VEHICLES_FILE", DATA_DIR / "vehicles.json")
    )
    STORAGE_DIR: Path = Path(os.environ.get("AUTH_STORAGE_DIR", BASE_DIR / "storage"))
    RESULTS_DIR: Path = BASE_DIR / "test-results"

    @classmethod
    def base_url(cls, site: str) -> str:
        """Return the storefront URL for ``site`` in this environment."""
        return get_base_url(cls.ENV, site)

    @classmethod
    def browser_launch_args(cls, **overrides) -> dict:
        """
        Return browser launch options for this environment.

        HEADLESS sets the default; explicit ``overrides`` (e.g. from
        pytest-playwright's ``--headed``) take precedence.
        """
        return {"headless": cls.HEADLESS, **overrides}

    @classmethod
    def storage_state_path(cls, site: str) -> Path:
        """Return the saved-session snapshot path for ``site``."""
        return cls.STORAGE_DIR / f"auth-{site}.json"


class DevConfig(Config):
    """Dev environment configuration."""

    ENV: str = "dev"


class StagingConfig(Config):
    """Staging environment configuration."""

    ENV: str = "staging"


class ProdConfig(Config):
    """Production environment configuration."""

    ENV: str = "prod"


# Configuration mapping for easy access
config = {
    "dev": DevConfig,
    "staging": StagingConfig,
    "prod": ProdConfig,
    "default": ProdConfig,
}


def get_env() -> str:
    """Return the target environment from ENV or TEST_ENV (default: prod)."""
    return os.environ.get("ENV") or os.environ.get("TEST_ENV") or "prod"


def get_site() -> str:
    """Return the target site from SITE (default: parts)."""
    return os.environ.get("SITE") or "parts"


def get_base_url(env: str = "prod", site: str = "parts") -> str:
    """
    Resolve the storefront base URL for an environment/site pair.

    Args:
        env: One of ``dev``, ``staging``, ``prod``.
        site: One of ``parts``, ``accessories``.

    Returns:
        Base URL with a trailing slash.

    Raises:
        ValueError: If either value is not recognised.
    """
    if env not in SITE_CONFIG:
        raise ValueError(f"Unknown environment {env!r}; expected one of {ENVIRONMENTS}")
    if site not in SITE_CONFIG[env]:
        raise ValueError(f"Unknown site {site!r}; expected one of {SITES}")
    return SITE_CONFIG[env][site]


def banner_close_selector() -> str:
    """Return the BANNER_CLOSE_SELECTOR override, or an empty string."""
    return os.environ.get("BANNER_CLOSE_SELECTOR", "").strip()


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (dev, staging, prod).
             If None, uses the ENV / TEST_ENV environment variables.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = get_env()
    return config.get(env, config["default"])
