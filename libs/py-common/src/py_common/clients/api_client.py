"""Base HTTP client for calling REST APIs with bearer token authentication.

This module provides a reusable async client class that builds URLs against a
base address, merges default headers and attaches the ``Authorization`` header
to every request.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class APIClient:
    """
    Base HTTP client for bearer-authenticated REST APIs.

    Handles:
    - Automatic injection of the Authorization header
    - Timeout configuration
    - Responses that are JSON, plain text or empty
    - Standard HTTP methods (GET, POST, PUT, DELETE)

    Example:
        ```python
        from py_common.clients import APIClient

        client = APIClient(
            base_url="https://api.indx.co/api/",
            bearer_token="eyJhbGciOi...",
            timeout=30.0,
        )

        state = await client.get("Search/0")
        ```
    """

    def __init__(
        self,
        base_url: str,
        bearer_token: Optional[str] = None,
        timeout: float = 30.0,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API (e.g., "https://api.indx.co/api/")
            bearer_token: Optional bearer token; a leading "Bearer " is accepted
            timeout: Request timeout in seconds (default: 30.0)
            default_headers: Optional default headers to include in all requests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers: Dict[str, str] = {}

        if default_headers:
            self._headers.update(default_headers)

        if bearer_token:
            token = bearer_token.strip()
            if not token.lower().startswith("bearer "):
                token = f"Bearer {token}"
            self._headers["Authorization"] = token
            logger.debug("Bearer token configured")
        else:
            logger.debug("No bearer token provided - requests will be sent unauthenticated")

    @property
    def is_authenticated(self) -> bool:
        """True when requests carry an Authorization header."""
        return "Authorization" in self._headers

    def _get_headers(self, additional_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Get headers for a request, merging default headers with additional headers.

        Args:
            additional_headers: Optional additional headers to include

        Returns:
            Merged headers dictionary
        """
        headers = self._headers.copy()
        if additional_headers:
            headers.update(additional_headers)
        return headers

    def _build_url(self, path: str) -> str:
        """
        Build full URL from base URL and path.

        Args:
            path: API path (e.g., "Search/0")

        Returns:
            Full URL
        """
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    @staticmethod
    def _parse_response(response: httpx.Response) -> Any:
        """Return the decoded JSON body, the raw text, or None for an empty body."""
        if response.status_code == 204 or not response.text:
            return None
        try:
            return response.json()
        except ValueError:
            # text/plain acknowledgements
            return response.text

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make a GET request.

        Args:
            path: API path
            params: Optional query parameters
            headers: Optional additional headers

        Returns:
            Decoded response body (JSON, text, or None when empty)

        Raises:
            httpx.HTTPStatusError: If response status code indicates an error
            httpx.RequestError: If request fails
        """
        url = self._build_url(path)
        request_headers = self._get_headers(headers)

        logger.debug(f"GET {url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url, params=params, headers=request_headers)
            response.raise_for_status()
            return self._parse_response(response)

    async def post(
        self,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make a POST request.

        Args:
            path: API path
            json: Optional JSON payload (object or array)
            params: Optional query parameters
            headers: Optional additional headers

        Returns:
            Decoded response body (JSON, text, or None when empty)

        Raises:
            httpx.HTTPStatusError: If response status code indicates an error
            httpx.RequestError: If request fails
        """
        url = self._build_url(path)
        request_headers = self._get_headers(headers)

        if json is not None and "Content-Type" not in request_headers:
            request_headers["Content-Type"] = "application/json"

        logger.debug(f"POST {url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, json=json, params=params, headers=request_headers)
            response.raise_for_status()
            return self._parse_response(response)

    async def put(
        self,
        path: str,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make a PUT request.

        Args:
            path: API path (e.g., "Search/array/0")
            json: Optional JSON payload (object or array)
            headers: Optional additional headers

        Returns:
            Decoded response body (JSON, text, or None when empty)

        Raises:
            httpx.HTTPStatusError: If response status code indicates an error
            httpx.RequestError: If request fails
        """
        url = self._build_url(path)
        request_headers = self._get_headers(headers)

        if json is not None and "Content-Type" not in request_headers:
            request_headers["Content-Type"] = "application/json"

        logger.debug(f"PUT {url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            if json is not None:
                response = await client.put(url, json=json, headers=request_headers)
            else:
                response = await client.put(url, headers=request_headers)
            response.raise_for_status()
            return self._parse_response(response)

    async def delete(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make a DELETE request.

        Args:
            path: API path
            headers: Optional additional headers

        Returns:
            Decoded response body, or None if response is empty

        Raises:
            httpx.HTTPStatusError: If response status code indicates an error
            httpx.RequestError: If request fails
        """
        url = self._build_url(path)
        request_headers = self._get_headers(headers)

        logger.debug(f"DELETE {url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.delete(url, headers=request_headers)
            response.raise_for_status()
            return self._parse_response(response)
