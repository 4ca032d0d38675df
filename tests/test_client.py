from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from riskrate_cli.client import RiskConsoleClient
from riskrate_cli.exceptions import ApiError, AuthenticationError, RiskRateError
from riskrate_cli.models.config import AppConfig

BASE_URL = "https://risk.example.com/api/"


def _make_client() -> RiskConsoleClient:
    config = AppConfig(
        api_url=BASE_URL,
        bearer_token="test-token",
        tenant_id="tenant-42",
    )
    return RiskConsoleClient(config)


def _mock_response(status_code: int = 200, json_data: object = None) -> MagicMock:
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = json_data if json_data is not None else {}
    resp.raise_for_status = MagicMock()
    return resp


class TestClientHeaders:
    def test_session_headers(self) -> None:
        client = _make_client()
        headers = client._session.headers
        assert headers["Authorization"] == "Bearer test-token"
        assert headers["x-tenant-id"] == "tenant-42"
        assert headers["Accept"] == "application/json"
        assert "riskrate-cli/" in headers["User-Agent"]


class TestGet:
    def test_get_success(self) -> None:
        client = _make_client()
        mock_resp = _mock_response(200, {"_id": "r1"})
        with patch.object(client._session, "request", return_value=mock_resp) as mock_req:
            result = client.get("risks/r1")
        mock_req.assert_called_once_with("GET", BASE_URL + "risks/r1", params=None)
        assert result == {"_id": "r1"}

    def test_get_with_params(self) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(200, [])) as mock_req:
            client.get("risk-treatments", params={"risk": "r1"})
        mock_req.assert_called_once_with(
            "GET", BASE_URL + "risk-treatments", params={"risk": "r1"},
        )

    def test_get_strips_leading_slash(self) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(200, {})) as mock_req:
            client.get("/risk-ratings")
        mock_req.assert_called_once_with("GET", BASE_URL + "risk-ratings", params=None)


class TestCollections:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("list_risks", "risks"),
            ("list_treatments", "risk-treatments"),
            ("list_ratings", "risk-ratings"),
            ("list_impact_settings", "risk-impact-settings"),
            ("list_likelihood_settings", "risk-likelihood-settings"),
            ("list_effectiveness_options", "risk-control-effectiveness"),
            ("list_assessment_cycles", "residual-risk-assessment-cycle"),
        ],
    )
    def test_collection_paths(self, method: str, path: str) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(200, [])) as mock_req:
            assert getattr(client, method)() == []
        mock_req.assert_called_once_with("GET", BASE_URL + path, params=None)

    def test_unwraps_data_envelope(self) -> None:
        client = _make_client()
        mock_resp = _mock_response(200, {"data": [{"_id": "r1"}], "total": 1})
        with patch.object(client._session, "request", return_value=mock_resp):
            assert client.list_risks() == [{"_id": "r1"}]

    def test_non_list_payload_raises(self) -> None:
        client = _make_client()
        mock_resp = _mock_response(200, {"data": "nope"})
        with patch.object(client._session, "request", return_value=mock_resp):
            with pytest.raises(ApiError, match="Unexpected response from risk console for risks"):
                client.list_risks()


class TestErrorHandling:
    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failure_raises_authentication_error(self, status: int) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(status)):
            with pytest.raises(AuthenticationError, match="bearer token may have expired"):
                client.get("risks")

    def test_404_raises_api_error(self) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(404)):
            with pytest.raises(ApiError, match="Resource not found: risk-ratings"):
                client.list_ratings()

    @pytest.mark.parametrize("status", [500, 502])
    def test_server_error_raises_api_error(self, status: int) -> None:
        client = _make_client()
        with patch.object(client._session, "request", return_value=_mock_response(status)):
            with pytest.raises(ApiError, match=f"server error \\({status}\\)"):
                client.get("risks")

    def test_connection_error_raises_api_error(self) -> None:
        client = _make_client()
        with patch.object(
            client._session, "request", side_effect=requests.ConnectionError("refused"),
        ):
            with pytest.raises(ApiError, match="Cannot connect to"):
                client.get("risks")

    def test_request_exception_raises_api_error(self) -> None:
        client = _make_client()
        with patch.object(
            client._session, "request", side_effect=requests.RequestException("timeout"),
        ):
            with pytest.raises(ApiError, match="Cannot connect to"):
                client.get("risks")

    def test_unmapped_4xx_raises_api_error(self) -> None:
        client = _make_client()
        mock_resp = _mock_response(400)
        mock_resp.raise_for_status.side_effect = requests.HTTPError("400 bad request")
        with patch.object(client._session, "request", return_value=mock_resp):
            with pytest.raises(ApiError, match="request failed \\(400\\) for risks"):
                client.get("risks")

    def test_invalid_json_raises_api_error(self) -> None:
        client = _make_client()
        mock_resp = _mock_response(200)
        mock_resp.json.side_effect = ValueError("invalid json")
        with patch.object(client._session, "request", return_value=mock_resp):
            with pytest.raises(ApiError, match="Invalid response from risk console for risks"):
                client.get("risks")

    def test_error_types_are_riskrate_errors(self) -> None:
        assert issubclass(ApiError, RiskRateError)
        assert issubclass(AuthenticationError, ApiError)
