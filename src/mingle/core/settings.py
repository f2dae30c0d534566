"""Application settings and configuration.

This module defines all configuration options for the Mingle application.
Settings are loaded from environment variables with sensible defaults and
handed to the application factory explicitly.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files, or by
    constructing an instance directly (tests do this).
    """

    # Application metadata
    app_name: str = Field(default="Mingle API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./mingle.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Image storage, served back under the same relative path
    post_image_dir: str = Field(default="post/Images", alias="POST_IMAGE_DIR")
    profile_image_dir: str = Field(default="profile/Images", alias="PROFILE_IMAGE_DIR")
    post_image_max_bytes: int = Field(default=10 * 1024 * 1024, alias="POST_IMAGE_MAX_BYTES")
    profile_image_max_bytes: int = Field(
        default=5 * 1024 * 1024,
        alias="PROFILE_IMAGE_MAX_BYTES",
    )
    allowed_image_extensions: list[str] = Field(
        default=["jpeg", "jpg", "png", "gif"],
        alias="ALLOWED_IMAGE_EXTENSIONS",
    )
    multi_post_max_files: int = Field(default=10, alias="MULTI_POST_MAX_FILES")

    # Explore feed pagination
    explore_default_limit: int = Field(default=20, alias="EXPLORE_DEFAULT_LIMIT")
    explore_max_limit: int = Field(default=100, alias="EXPLORE_MAX_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]
