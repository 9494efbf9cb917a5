"""
HTTP access to the movie catalog API.

Thin wrapper over ``httpx.Client`` that unwraps the response envelope and
turns every failure into an ApiError.
"""

from typing import Any, Dict, List, Optional
import logging
import os

import httpx

logger = logging.getLogger(__name__)

CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:8000")
REQUEST_TIMEOUT = float(os.getenv("CATALOG_API_TIMEOUT", "10"))


class ApiError(Exception):
    """The API answered, but not with ``success: true``."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    def describe(self) -> str:
        return ", ".join(self.errors) if self.errors else self.message


class TransportError(ApiError):
    """The request never got a response."""


class CatalogApi:
    def __init__(self, client: Optional[httpx.Client] = None, base_url: str = CATALOG_API_URL):
        self.client = client or httpx.Client(base_url=base_url, timeout=REQUEST_TIMEOUT)

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {type(e).__name__}: {e}")
            raise TransportError(str(e)) from e
        except (TypeError, ValueError) as e:
            # The body could not be encoded as JSON; nothing was sent
            logger.error(f"{method} {url} not sent: {e}")
            raise ApiError(f"Invalid request data: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise ApiError(f"Unexpected response from server ({response.status_code})", response.status_code)

        if not body.get("success"):
            raise ApiError(
                body.get("message") or f"Request failed ({response.status_code})",
                response.status_code,
                body.get("errors"),
            )
        return body

    def list_movies(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/movies")["data"]

    def get_movie(self, movie_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/movies/{movie_id}")["data"]

    def create_movie(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/movies", json=payload)

    def update_movie(self, movie_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/movies/{movie_id}", json=payload)

    def delete_movie(self, movie_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/movies/{movie_id}")

    def close(self):
        self.client.close()
