"""Configuration management for chari-stub."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from chari_stub.exceptions import ConfigurationError

DEFAULT_API_KEYS = [
    "aslan_internal_key_123",
    "chari_api_key_123",
    "chari_internal_key_456",
    "demo-chari-api-key",
]


@dataclass
class ServerConfig:
    """HTTP listener configuration."""

    host: str = "0.0.0.0"
    port: int = 4000

    @property
    def base_url(self) -> str:
        """Get the local base URL."""
        return f"http://localhost:{self.port}"


@dataclass
class AuthConfig:
    """Static API key allow-list."""

    api_keys: list[str] = field(default_factory=lambda: list(DEFAULT_API_KEYS))
    public_paths: list[str] = field(default_factory=lambda: ["/health"])

    def is_allowed(self, api_key: str | None) -> bool:
        """Check a key against the allow-list."""
        return bool(api_key) and api_key in self.api_keys


@dataclass
class FixtureConfig:
    """Controls the sample data loaded at start-up."""

    seed: int | None = None
    transactions_per_customer: int = 25
    extra_customers: int = 3
    starting_balance: Decimal = Decimal("5000.00")
    default_balance: Decimal = Decimal("1500.00")
    otp_code: str = "123456"
    currency: str = "MAD"


@dataclass
class ChariStubConfig:
    """Main configuration for chari-stub."""

    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    fixtures: FixtureConfig = field(default_factory=FixtureConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "ChariStubConfig":
        """Reject settings the stub cannot run with."""
        if not self.auth.api_keys:
            raise ConfigurationError("At least one API key must be configured")
        if self.fixtures.transactions_per_customer < 0 or self.fixtures.extra_customers < 0:
            raise ConfigurationError("Fixture counts must not be negative")
        if not 0 < self.server.port < 65536:
            raise ConfigurationError(f"Invalid port: {self.server.port}")
        if self.log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format: {self.log_format}")
        return self

    @classmethod
    def from_env(cls) -> "ChariStubConfig":
        """Create config from environment variables."""
        import os

        keys_str = os.getenv("CHARI_API_KEYS")
        api_keys = (
            [k.strip() for k in keys_str.split(",") if k.strip()]
            if keys_str is not None
            else list(DEFAULT_API_KEYS)
        )

        server = ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", "4000"),
        )

        fixtures = FixtureConfig(
            seed=_int_env("SEED", None) if os.getenv("SEED") else None,
            transactions_per_customer=_int_env("TRANSACTIONS_PER_CUSTOMER", "25"),
            extra_customers=_int_env("EXTRA_CUSTOMERS", "3"),
            starting_balance=_decimal_env("STARTING_BALANCE", "5000.00"),
            default_balance=_decimal_env("DEFAULT_BALANCE", "1500.00"),
            otp_code=os.getenv("OTP_CODE", "123456"),
        )

        return cls(
            server=server,
            auth=AuthConfig(api_keys=api_keys),
            fixtures=fixtures,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        ).validate()


def _int_env(name: str, default: str | None) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _decimal_env(name: str, default: str) -> Decimal:
    import os

    raw = os.getenv(name, default)
    try:
        return Decimal(raw).quantize(Decimal("0.01"))
    except InvalidOperation as e:
        raise ConfigurationError(f"{name} must be a decimal amount, got {raw!r}") from e
