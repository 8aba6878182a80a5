"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and portfolio engine configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `ledger_graphql_url` reads from `LEDGER_GRAPHQL_URL`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logging level name.
        ledger_graphql_url: GraphQL HTTP endpoint of the token-operations ledger.
        ledger_request_timeout_seconds: Per-page HTTP timeout for ledger queries.
        ledger_page_size: Ledger events requested per page.
        ledger_max_pages: Hard cap of pages fetched per paginated query.
        rpc_url: JSON-RPC endpoint used for on-chain balance and decimals reads.
        denomination_token_address: Token in which deposits and balances are denominated.
        denomination_decimals: Optional fixed decimals override for the denomination token.
        secondary_token_address: Optional second token reported in per-address balances.
        stats_timeout_seconds: Optional timeout applied to one stats computation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    ledger_graphql_url: str = Field(min_length=1)
    ledger_request_timeout_seconds: float = Field(default=20.0, gt=0)
    ledger_page_size: int = Field(default=1000, ge=1, le=10000)
    ledger_max_pages: int = Field(default=100_000, ge=1)
    rpc_url: str = Field(min_length=1)
    denomination_token_address: str = Field(min_length=1)
    denomination_decimals: int | None = Field(default=None, ge=0, le=255)
    secondary_token_address: str | None = Field(default=None)
    stats_timeout_seconds: float | None = Field(default=None, gt=0)

    @field_validator("ledger_graphql_url", "rpc_url", "denomination_token_address")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("secondary_token_address")
    @classmethod
    def _validate_optional_address(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
