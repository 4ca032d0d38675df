from __future__ import annotations

from dataclasses import dataclass

from riskrate_cli.exceptions import ConfigError


def normalize_api_url(api_url: str) -> str:
    """Strip *api_url*, require HTTPS and add the trailing slash request paths rely on."""
    url = api_url.strip()
    if not url:
        raise ConfigError("API URL cannot be empty.")
    if not url.startswith("https://"):
        raise ConfigError("API URL must start with https://")
    return url if url.endswith("/") else url + "/"


@dataclass
class AppConfig:
    api_url: str
    bearer_token: str
    tenant_id: str

    def __post_init__(self) -> None:
        self.api_url = normalize_api_url(self.api_url)
        self.bearer_token = self.bearer_token.strip()
        if not self.bearer_token:
            raise ConfigError("Bearer token cannot be empty.")
        self.tenant_id = self.tenant_id.strip()
        if not self.tenant_id:
            raise ConfigError("Tenant ID cannot be empty.")
