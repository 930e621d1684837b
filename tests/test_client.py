"""
Unit tests for EdgeGrid client library.
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from edgegrid_client import (
    EdgeGridClient,
    EdgeGridAuth,
    Credentials,
    ConfigurationError,
    InvalidSectionError,
    HTTPError
)
from edgegrid_client.constants import HEADER_AUTHORIZATION


def make_response(status_code=200, content=b"{}"):
    """Build a response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    return response


def fake_send(request, **kwargs):
    """Return an empty 200 response for a prepared request."""
    response = make_response()
    response.request = request
    response.url = request.url
    return response


class TestEdgeGridClient:
    """Test EdgeGrid client functionality."""

    @pytest.fixture
    def credentials(self):
        """Create test credentials."""
        return Credentials("ct1", "cs1", "at1", "akab-test.luna.akamaiapis.net")

    @pytest.fixture
    def client(self, credentials):
        """Create test client."""
        return EdgeGridClient(credentials)

    def test_init_default_config(self, credentials):
        """Test client initialization with default config."""
        client = EdgeGridClient(credentials)

        assert client.base_url == "https://akab-test.luna.akamaiapis.net"
        assert client.config['timeout'] == 30
        assert client.config['headers_to_sign'] == ()
        assert isinstance(client.session.auth, EdgeGridAuth)

    def test_init_custom_config(self, credentials):
        """Test client initialization with custom config."""
        client = EdgeGridClient(credentials, timeout=60, headers_to_sign=["X-Test"])

        assert client.config['timeout'] == 60
        assert client.session.auth.headers_to_sign == ("X-Test",)

    def test_init_invalid_config(self, credentials):
        """Test client initialization with invalid config."""
        with pytest.raises(ConfigurationError):
            EdgeGridClient(credentials, timeout=0)

        with pytest.raises(ConfigurationError):
            EdgeGridClient(credentials, headers_to_sign="X-Test")

    def test_init_tuple_timeout(self, credentials):
        """Test (connect, read) timeouts are accepted and validated."""
        client = EdgeGridClient(credentials, timeout=(3, 10.5))
        assert client.config['timeout'] == (3, 10.5)

        assert EdgeGridClient(credentials, timeout=(3, None)).config['timeout'] == (3, None)
        assert EdgeGridClient(credentials, timeout=None).config['timeout'] is None

        with pytest.raises(ConfigurationError):
            EdgeGridClient(credentials, timeout=(3, 0))

        with pytest.raises(ConfigurationError):
            EdgeGridClient(credentials, timeout=(1, 2, 3))

        with pytest.raises(ConfigurationError):
            EdgeGridClient(credentials, timeout="30")

    def test_from_edgerc(self, tmp_path):
        """Test client creation from .edgerc."""
        path = tmp_path / ".edgerc"
        path.write_text(
            "[papi]\n"
            "client_secret = cs\n"
            "host = akab-papi.luna.akamaiapis.net\n"
            "access_token = at\n"
            "client_token = ct\n"
        )

        client = EdgeGridClient.from_edgerc(str(path), "papi")
        assert client.base_url == "https://akab-papi.luna.akamaiapis.net"

        with pytest.raises(InvalidSectionError):
            EdgeGridClient.from_edgerc(str(path), "default")

    def test_from_env(self, monkeypatch):
        """Test client creation from environment variables."""
        monkeypatch.setenv("AKAMAI_CCU_HOST", "akab-ccu.luna.akamaiapis.net")
        monkeypatch.setenv("AKAMAI_CCU_CLIENT_TOKEN", "ct")
        monkeypatch.setenv("AKAMAI_CCU_CLIENT_SECRET", "cs")
        monkeypatch.setenv("AKAMAI_CCU_ACCESS_TOKEN", "at")

        client = EdgeGridClient.from_env("ccu")
        assert client.base_url == "https://akab-ccu.luna.akamaiapis.net"

    def test_from_env_missing(self, monkeypatch):
        """Test client creation with empty environment."""
        for name in ("HOST", "CLIENT_TOKEN", "CLIENT_SECRET", "ACCESS_TOKEN"):
            monkeypatch.delenv(f"AKAMAI_NONE_{name}", raising=False)

        with pytest.raises(ConfigurationError):
            EdgeGridClient.from_env("none")

    def test_prepare_request_body_json(self, client):
        """Test request body preparation with JSON data."""
        json_data = {"key": "value", "number": 42}
        body = client._prepare_request_body(json_data=json_data)

        expected = json.dumps(json_data, separators=(',', ':')).encode('utf-8')
        assert body == expected

    def test_prepare_request_body_string(self, client):
        """Test request body preparation with string data."""
        assert client._prepare_request_body(data="test string") == b"test string"

    def test_prepare_request_body_bytes(self, client):
        """Test request body preparation with bytes data."""
        assert client._prepare_request_body(data=b"test bytes") == b"test bytes"

    def test_prepare_request_body_empty(self, client):
        """Test request body preparation with no data."""
        assert client._prepare_request_body() is None

    @patch('edgegrid_client.client.requests.Session.request')
    def test_make_request_url(self, mock_request, client):
        """Test that requests target the API host."""
        mock_request.return_value = Mock()

        client._make_request('GET', 'papi/v1/groups')

        args, kwargs = mock_request.call_args
        assert args == ('GET', 'https://akab-test.luna.akamaiapis.net/papi/v1/groups')
        assert kwargs['timeout'] == 30

    @patch('edgegrid_client.client.requests.Session.request')
    def test_make_request_json(self, mock_request, client):
        """Test HTTP request with JSON data."""
        mock_request.return_value = Mock()

        json_data = {"test": "data"}
        client._make_request('POST', '/test', json_data=json_data)

        args, kwargs = mock_request.call_args
        assert kwargs['headers']['Content-Type'] == 'application/json'
        assert kwargs['data'] == json.dumps(json_data, separators=(',', ':')).encode('utf-8')

    @patch('edgegrid_client.client.requests.Session.request')
    def test_http_methods(self, mock_request, client):
        """Test all HTTP method shortcuts."""
        mock_request.return_value = Mock()

        client.get('/test', params={"a": "1"})
        client.post('/test', json={"data": "test"})
        client.put('/test', data="test")
        client.patch('/test', json=[{"op": "add"}])
        client.delete('/test')

        assert mock_request.call_count == 5

        calls = mock_request.call_args_list
        assert [c[0][0] for c in calls] == ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']
        assert calls[0][1]['params'] == {"a": "1"}

    @patch('edgegrid_client.client.requests.Session.request')
    def test_http_error(self, mock_request, client):
        """Test transport failures are wrapped."""
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HTTPError):
            client.get('/test')

    @patch('requests.adapters.HTTPAdapter.send', side_effect=fake_send)
    def test_requests_are_signed(self, mock_send, client):
        """Test the request handed to the transport carries EdgeGrid auth."""
        client.post('/papi/v1/search', json={"propertyName": "www"}, params={"b": "2", "a": "1"})

        request = mock_send.call_args[0][0]
        assert request.url == "https://akab-test.luna.akamaiapis.net/papi/v1/search?a=1&b=2"
        assert request.body == b'{"propertyName":"www"}'
        assert request.headers[HEADER_AUTHORIZATION].startswith(
            "EG1-HMAC-SHA256 client_token=ct1;access_token=at1;timestamp="
        )
        assert ";signature=" in request.headers[HEADER_AUTHORIZATION]

    @patch('edgegrid_client.client.requests.Session.request')
    def test_request_json(self, mock_request, client):
        """Test JSON responses are decoded."""
        mock_request.return_value = make_response(200, b'{"groups": {"items": []}}')

        result = client.request_json('POST', '/papi/v1/search', json={"propertyName": "www"})

        assert result == {"groups": {"items": []}}
        args, kwargs = mock_request.call_args
        assert args[0] == 'POST'
        assert kwargs['data'] == b'{"propertyName":"www"}'

    @patch('edgegrid_client.client.requests.Session.request')
    def test_request_json_empty_body(self, mock_request, client):
        """Test empty successful responses decode to None."""
        mock_request.return_value = make_response(204, b"")

        assert client.request_json('DELETE', '/test') is None

    @patch('edgegrid_client.client.requests.Session.request')
    def test_request_json_error_status(self, mock_request, client):
        """Test non-2xx responses raise with the status code."""
        mock_request.return_value = make_response(401, b'{"title": "Unauthorized"}')

        with pytest.raises(HTTPError) as excinfo:
            client.request_json('GET', '/test')
        assert excinfo.value.status_code == 401
        assert "Unauthorized" in str(excinfo.value)

    @patch('edgegrid_client.client.requests.Session.request')
    def test_request_json_invalid_body(self, mock_request, client):
        """Test non-JSON bodies raise HTTPError."""
        mock_request.return_value = make_response(200, b"<html>")

        with pytest.raises(HTTPError):
            client.request_json('GET', '/test')

    def test_context_manager(self, credentials):
        """Test client as context manager."""
        with EdgeGridClient(credentials) as client:
            assert client.session is not None
