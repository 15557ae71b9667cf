"""Client settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Remote API
    api_base_url: str = "https://sandbox.public.api.bunq.com"
    bunq_api_key: str = ""  # used by the bootstrap flow when no key is passed explicitly

    # Default request headers
    user_agent: str = "bunq-client-python/0.1 (+https://pypi.org/project/bunq-client/)"
    bunq_language: str = "en_US"
    bunq_region: str = "en_US"
    bunq_geolocation: str = "0 0 0 0 000"  # placeholder, bunq expects the header on every call

    # Device registration
    device_description: str = "bunq-client"
    permitted_ips: str = ""  # Comma-separated, empty = current IP only

    # Transport
    connect_timeout: float = 10.0
    request_timeout: float = 60.0

    # Response verification
    require_response_signature: bool = False  # strict mode: unsigned responses are rejected

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def permitted_ips_list(self) -> list[str]:
        """Parse comma-separated permitted IPs."""
        return [ip.strip() for ip in self.permitted_ips.split(",") if ip.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
