"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for FormFlow happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. callback_url -> CALLBACK_URL). Type coercion and validation are
      built in.

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved from environment.

Security notes:
  SIGNUP_REDIRECT_PATH must be a relative path. An absolute or
  protocol-relative value would turn the post-signup navigation into an
  open redirect, so Settings refuses to load one.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or forms/.
"""

import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("formflow.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False

    # ------------------------------------------------------------------
    # Submission endpoints
    # ------------------------------------------------------------------

    # Credentials-management service that owns local accounts (signup form).
    signup_url: str = "http://localhost:8080/user/signup"
    # Generic resource store used by the register form (mock REST API).
    register_url: str = "https://jsonplaceholder.typicode.com/posts"
    # Base URL for the read-only fetch helpers (users, posts, photos).
    resource_api_url: str = "https://jsonplaceholder.typicode.com"
    # Seconds. Enforced by the HTTP and identity clients, never by the workflow.
    http_timeout: float = 10.0

    # ------------------------------------------------------------------
    # Identity provider
    # ------------------------------------------------------------------

    auth_base_url: str = "http://localhost:3000/api/auth"
    callback_url: str = "http://localhost:3000"
    signup_redirect_path: str = "/"

    # OAuth providers (optional -- empty string means provider is disabled)
    github_client_id: str = ""
    github_client_secret: str = ""
    google_client_id: str = ""
    google_client_secret: str = ""

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    login_rate_limit: str = "10/minute"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_redirect_path(self) -> "Settings":
        """Reject post-signup redirect targets that could leave the site."""
        path = self.signup_redirect_path
        if not path.startswith("/") or path.startswith("//"):
            raise ValueError("SIGNUP_REDIRECT_PATH must be a relative path starting with a single '/'.")
        if self.debug:
            logger.warning("DEBUG is enabled. Do not run this configuration in production.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    Uses lru_cache so Settings() is instantiated exactly once -- at first call.
    All modules should call get_settings() rather than constructing Settings() directly.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
