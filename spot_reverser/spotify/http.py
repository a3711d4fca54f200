"""
Thin HTTP transport for the Spotify Web API.

HttpClient wraps a requests.Session and classifies every response as
success (2xx) or failure (anything else). A failure raises the error class
chosen by the caller, carrying the full response body text, so each
component reports its own failure kind (AuthError, FetchError, ...).

One HttpClient is created per workflow run and closed when the run ends.

Usage:
    with HttpClient() as http:
        response = http.request(
            "GET", url,
            headers=http.bearer(token),
            error_cls=FetchError,
            error_message="Failed to get songs",
        )
"""

from types import TracebackType
from typing import Any

import requests

from spot_reverser.core.exceptions import SyncError
from spot_reverser.core.logger import get_logger


logger = get_logger(__name__)

API_BASE_URL = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"


def is_success(status_code: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status_code <= 299


def playlist_tracks_url(playlist_id: str) -> str:
    return f"{API_BASE_URL}/playlists/{playlist_id}/tracks"


class HttpClient:
    """
    Session wrapper issuing requests and classifying their status.

    Attributes:
        session: The underlying requests.Session.
        timeout: Timeout passed to every request. None keeps the
                 transport default (no timeout).
    """

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        """Build the Authorization header for a bearer token."""
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        url: str,
        *,
        error_cls: type[SyncError],
        error_message: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        data: str | bytes | None = None,
        json: Any = None
    ) -> requests.Response:
        """
        Send a request and return the response if its status is 2xx.

        Args:
            method: HTTP method ("GET", "POST", "PUT").
            url: Absolute request URL.
            error_cls: SyncError subclass raised on failure.
            error_message: Message of the raised error.
            headers: Extra request headers.
            params: Query parameters, encoded in the given order.
            data: Raw request body.
            json: Body serialized as JSON (sets Content-Type: application/json).

        Returns:
            The successful requests.Response.

        Raises:
            error_cls: If the status is not 2xx (body text and status attached),
                       or if the request could not be sent at all.
        """
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise error_cls(
                f"{error_message}: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if not is_success(response.status_code):
            # Read the whole body before failing to keep the API's diagnostic
            raise error_cls(
                error_message,
                body=response.text,
                status_code=response.status_code,
                details={"url": url}
            )

        return response

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None
    ) -> None:
        self.close()
