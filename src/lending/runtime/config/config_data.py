"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, field_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    user: str | None = Field(default=None, description="Database username override")
    app_db: str | None = Field(default=None, description="Database name override")
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    isolation_level: str | None = Field(
        default=None,
        description="Isolation level applied to intake transactions (engine default when unset)",
    )
    environment_mode: str = Field(
        default="development", description="Environment mode: development or production"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. In development and test mode, parse it from the URL
        2. In production mode, read it from `password_file` or the
            environment variable named by `password_env_var`
        """
        if self.environment_mode in ("development", "test"):
            from sqlalchemy.engine import make_url

            return make_url(self.url).password
        elif self.environment_mode == "production":
            if self.password_file:
                try:
                    with open(self.password_file) as f:
                        return f.read().strip()
                except OSError as e:
                    raise ValueError(
                        "Failed to read database password from file."
                    ) from e
            elif self.password_env_var:
                import os

                password = os.getenv(self.password_env_var)
                if password:
                    return password
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            elif self.is_sqlite:
                return None
            raise ValueError(
                "In production mode, either password_file or password_env_var must be set"
            )
        raise ValueError(
            "Invalid environment_mode; must be 'development', 'production', or 'test'"
        )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with overrides applied."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if self.is_sqlite:
            return self.url

        if base_url.password and self.environment_mode == "production":
            logger.warning(
                "Database URL contains a password in production mode; "
                "consider using a secrets file or environment variable."
            )

        if self.user and self.user != base_url.username:
            base_url = base_url.set(username=self.user)
        if self.app_db and self.app_db != base_url.database:
            base_url = base_url.set(database=self.app_db)

        resolved_password = self.password
        if resolved_password:
            base_url = base_url.set(password=resolved_password)

        # render_as_string avoids SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)


class CategoryConfig(BaseModel):
    """A shelf category: display name and call-sign prefix."""

    name: str = Field(description="Category display name")
    prefix: str = Field(description="Call-sign prefix letter(s)")


def _default_categories() -> list[CategoryConfig]:
    return [
        CategoryConfig(name=name, prefix=prefix)
        for name, prefix in (
            ("Computer Science", "K"),
            ("Development Methodology", "M"),
            ("Web", "C"),
            ("Network", "N"),
            ("Security", "S"),
            ("Database", "D"),
            ("Programming Language", "L"),
            ("Operating System", "O"),
            ("Algorithm", "A"),
            ("Game", "G"),
            ("Mathematics", "H"),
            ("Artificial Intelligence", "I"),
            ("Hardware", "W"),
            ("Business", "B"),
            ("Humanities", "J"),
            ("Design", "E"),
            ("Etc", "X"),
        )
    ]


class CatalogConfig(BaseModel):
    """Catalog behaviour: shelf categories and loan period."""

    loan_period_days: int = Field(
        default=14, description="Days from the lending date until it is due"
    )
    categories: list[CategoryConfig] = Field(
        default_factory=_default_categories,
        description="Shelf categories in category id order (id 1 is the first entry)",
    )

    @field_validator("categories")
    @classmethod
    def _prefixes_are_unique(cls, value: list[CategoryConfig]) -> list[CategoryConfig]:
        prefixes = [category.prefix for category in value]
        if len(prefixes) != len(set(prefixes)):
            raise ValueError("category prefixes must be unique")
        return value


class LookupConfig(BaseModel):
    """External book metadata services."""

    national_library_url: str = Field(
        default="https://www.nl.go.kr/seoji/SearchApi.do",
        description="National library ISBN search endpoint",
    )
    national_library_key: str = Field(default="", description="National library cert key")
    naver_url: str = Field(
        default="https://openapi.naver.com/v1/search/book_adv",
        description="Naver advanced book search endpoint",
    )
    naver_client_id: str = Field(default="", description="Naver client id")
    naver_client_secret: str = Field(default="", description="Naver client secret")
    cover_image_url: str = Field(
        default="https://image.kyobobook.co.kr/images/book/xlarge/{suffix}/x{isbn}.jpg",
        description="Cover image template, formatted with the ISBN and its last three digits",
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
    lookup: LookupConfig = Field(
        default_factory=LookupConfig, description="Book metadata lookup configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
