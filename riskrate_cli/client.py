from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from riskrate_cli import __version__
from riskrate_cli.exceptions import ApiError, AuthenticationError
from riskrate_cli.models.config import AppConfig


class RiskConsoleClient:
    """Read-only access to the risk console's tenant-scoped collections."""

    def __init__(self, config: AppConfig) -> None:
        self._base_url = config.api_url
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {config.bearer_token}",
            "x-tenant-id": config.tenant_id,
            "User-Agent": f"riskrate-cli/{__version__}",
            "Accept": "application/json",
        })

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return self._request("GET", path, params=params)

    def list_risks(self) -> List[Any]:
        return self._list("/risks")

    def list_treatments(self) -> List[Any]:
        return self._list("/risk-treatments")

    def list_ratings(self) -> List[Any]:
        return self._list("/risk-ratings")

    def list_impact_settings(self) -> List[Any]:
        return self._list("/risk-impact-settings")

    def list_likelihood_settings(self) -> List[Any]:
        return self._list("/risk-likelihood-settings")

    def list_effectiveness_options(self) -> List[Any]:
        return self._list("/risk-control-effectiveness")

    def list_assessment_cycles(self) -> List[Any]:
        return self._list("/residual-risk-assessment-cycle")

    def _list(self, path: str) -> List[Any]:
        response = self.get(path)
        if isinstance(response, dict):
            response = response.get("data", [])
        if not isinstance(response, list):
            raise ApiError(
                f"Unexpected response from risk console for {path.lstrip('/')}. Expected a list."
            )
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        normalized_path = path.lstrip("/")
        url = self._base_url + normalized_path
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(
                f"Cannot connect to {self._base_url}. "
                "Check your network connection and API URL."
            ) from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(
                "Authentication failed. Your bearer token may have expired. "
                "Run riskrate-cli --init to set a new token."
            )
        if response.status_code == 404:
            raise ApiError(
                f"Resource not found: {normalized_path}. "
                "The risk console API may have changed."
            )
        if response.status_code >= 500:
            raise ApiError(
                f"Risk console server error ({response.status_code}). "
                "Please try again later."
            )

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise ApiError(
                f"Risk console request failed ({response.status_code}) for {normalized_path}. "
                "Please verify the request and try again."
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"Invalid response from risk console for {normalized_path}. Expected JSON data."
            ) from exc
