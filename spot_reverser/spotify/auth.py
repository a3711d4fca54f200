"""
Access token acquisition for spot-reverser.

Exchanges the long-lived refresh token for a short-lived bearer token at
Spotify's OAuth token endpoint. Called once at the start of every workflow
run; the token is never cached between runs.

There is no retry here. A failed exchange aborts the run and the next
scheduled tick tries again with a fresh request.
"""

import base64
import json
from urllib.parse import quote, urlencode

from spot_reverser.core.exceptions import AuthError
from spot_reverser.core.logger import get_logger
from spot_reverser.spotify.http import TOKEN_URL, HttpClient
from spot_reverser.spotify.models import AccessToken


logger = get_logger(__name__)

# Playlist read/modify and library read/modify
SCOPES = (
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-library-read",
    "user-library-modify",
)


def basic_auth_header(client_id: str, client_secret: str) -> dict[str, str]:
    """
    Build the Basic Authorization header for the token endpoint.

    Example:
        >>> basic_auth_header("id", "secret")
        {'Authorization': 'Basic aWQ6c2VjcmV0'}
    """
    encoded = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}


def token_request_body(refresh_token: str) -> str:
    """
    Build the form-encoded body of the refresh request.

    Spaces in the scope list are encoded as %20, not '+'.
    """
    return urlencode(
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "scope": " ".join(SCOPES),
        },
        quote_via=quote,
    )


def acquire_token(
    http: HttpClient,
    client_id: str,
    client_secret: str,
    refresh_token: str
) -> AccessToken:
    """
    Exchange the refresh token for a bearer token.

    Args:
        http: Transport of the current run.
        client_id: Spotify application client ID.
        client_secret: Spotify application client secret.
        refresh_token: Long-lived refresh credential.

    Returns:
        AccessToken with the bearer credential and the granted scope.

    Raises:
        AuthError: If the endpoint answers with a non-2xx status (the body
                   text is attached), if the request cannot be sent, or if
                   the body has no usable access_token.
    """
    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    headers.update(basic_auth_header(client_id, client_secret))

    logger.info("Sending request to acquire token")

    response = http.request(
        "POST",
        TOKEN_URL,
        headers=headers,
        data=token_request_body(refresh_token),
        error_cls=AuthError,
        error_message="Failed to acquire token",
    )

    try:
        return AccessToken.from_spotify_api(response.json())
    except (json.JSONDecodeError, ValueError) as e:
        raise AuthError(
            f"Invalid token response: {e}",
            body=response.text,
            status_code=response.status_code,
            details={"url": TOKEN_URL}
        ) from e
