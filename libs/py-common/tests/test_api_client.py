"""Unit tests for APIClient."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import httpx

from py_common.clients.api_client import APIClient


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://test-indx:38171/api"


@pytest.fixture
def token():
    """Bearer token for testing."""
    return "test-token-12345"


def _json_response(payload, status_code=200):
    mock_response = MagicMock()
    mock_response.json.return_value = payload
    mock_response.status_code = status_code
    return mock_response


class TestAPIClient:
    """Test suite for APIClient."""

    def test_init_with_token(self, base_url, token):
        """Test client initialization with a bearer token."""
        client = APIClient(base_url=base_url, bearer_token=token)

        assert client.base_url == base_url
        assert client.timeout == 30.0
        assert client._headers["Authorization"] == f"Bearer {token}"

    def test_init_with_prefixed_token(self, base_url, token):
        """A token that already carries the scheme is not prefixed twice."""
        client = APIClient(base_url=base_url, bearer_token=f"Bearer {token}")

        assert client._headers["Authorization"] == f"Bearer {token}"

    def test_init_without_token(self, base_url):
        """Test client initialization without a token."""
        client = APIClient(base_url=base_url)

        assert "Authorization" not in client._headers

    def test_is_authenticated(self, base_url, token):
        """Authentication reflects whether a token was configured."""
        assert APIClient(base_url=base_url, bearer_token=token).is_authenticated is True
        assert APIClient(base_url=base_url).is_authenticated is False
        assert APIClient(base_url=base_url, bearer_token="").is_authenticated is False

    def test_init_with_default_headers(self, base_url, token):
        """Test client initialization with default headers."""
        client = APIClient(
            base_url=base_url,
            bearer_token=token,
            default_headers={"Accept": "*/*"},
        )

        assert client._headers["Accept"] == "*/*"
        assert client._headers["Authorization"] == f"Bearer {token}"

    def test_build_url(self, base_url):
        """Test URL building."""
        client = APIClient(base_url=base_url)

        assert client._build_url("/Search/0") == f"{base_url}/Search/0"
        assert client._build_url("Search/0") == f"{base_url}/Search/0"

        client_with_slash = APIClient(base_url=f"{base_url}/")
        assert client_with_slash._build_url("Search/array/0") == f"{base_url}/Search/array/0"

    def test_get_headers(self, base_url, token):
        """Test header merging."""
        client = APIClient(base_url=base_url, bearer_token=token)

        headers = client._get_headers(additional_headers={"Accept": "text/plain"})
        assert headers["Authorization"] == f"Bearer {token}"
        assert headers["Accept"] == "text/plain"

        headers = client._get_headers(additional_headers={"Authorization": "override"})
        assert headers["Authorization"] == "override"

    @pytest.mark.asyncio
    async def test_get_success(self, base_url, token):
        """Test successful GET request."""
        client = APIClient(base_url=base_url, bearer_token=token)
        mock_response = _json_response({"systemState": 1})

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.get.return_value = mock_response

            result = await client.get("Search/0")

            assert result == {"systemState": 1}
            call_kwargs = mock_client.get.call_args[1]
            assert call_kwargs["headers"]["Authorization"] == f"Bearer {token}"
            assert mock_client.get.call_args[0][0] == f"{base_url}/Search/0"

    @pytest.mark.asyncio
    async def test_plain_text_body_is_returned_as_text(self, base_url):
        """Bodies that are not JSON come back as text."""
        client = APIClient(base_url=base_url)
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = "Indexing started"
        mock_response.json.side_effect = ValueError("not json")

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.get.return_value = mock_response

            result = await client.get("Search/DoIndex/0")

            assert result == "Indexing started"

    @pytest.mark.asyncio
    async def test_put_with_array_payload(self, base_url, token):
        """PUT sends list payloads as JSON."""
        client = APIClient(base_url=base_url, bearer_token=token)
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = ""

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.put.return_value = mock_response

            payload = [{"documentKey": 0}, {"documentKey": 1}]
            result = await client.put("Search/array/0", json=payload)

            assert result is None
            call_kwargs = mock_client.put.call_args[1]
            assert call_kwargs["json"] == payload
            assert call_kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_put_without_body(self, base_url):
        """PUT without a payload sends no JSON body."""
        client = APIClient(base_url=base_url)
        mock_response = MagicMock()
        mock_response.status_code = 204

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.put.return_value = mock_response

            result = await client.put("Search/0")

            assert result is None
            call_kwargs = mock_client.put.call_args[1]
            assert "json" not in call_kwargs
            assert "Content-Type" not in call_kwargs["headers"]

    @pytest.mark.asyncio
    async def test_delete_no_content(self, base_url):
        """DELETE returning 204 yields None."""
        client = APIClient(base_url=base_url)
        mock_response = MagicMock()
        mock_response.status_code = 204

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.delete.return_value = mock_response

            result = await client.delete("Search/0")

            assert result is None
            mock_client.delete.assert_called_once()

    @pytest.mark.asyncio
    async def test_http_error_raises_exception(self, base_url, token):
        """Test that HTTP errors raise exceptions."""
        client = APIClient(base_url=base_url, bearer_token=token)

        mock_response = MagicMock()
        mock_response.status_code = 401
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Unauthorized",
            request=MagicMock(),
            response=mock_response,
        )

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.get.return_value = mock_response

            with pytest.raises(httpx.HTTPStatusError):
                await client.get("Search/0")

    @pytest.mark.asyncio
    async def test_timeout_configured(self, base_url):
        """Test that timeout is configured correctly."""
        client = APIClient(base_url=base_url, timeout=60.0)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client.get.return_value = _json_response({"systemState": 0})
            mock_client_class.return_value.__aenter__.return_value = mock_client

            await client.get("Search/0")

            mock_client_class.assert_called_once()
            assert mock_client_class.call_args[1]["timeout"] == 60.0

    @pytest.mark.asyncio
    async def test_request_without_token(self, base_url):
        """Test request without token doesn't include the Authorization header."""
        client = APIClient(base_url=base_url)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.get.return_value = _json_response({"systemState": 0})

            await client.get("Search/0")

            call_kwargs = mock_client.get.call_args[1]
            assert "Authorization" not in call_kwargs.get("headers", {})
