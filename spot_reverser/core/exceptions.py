"""
Exception classes for spot-reverser.

This module defines all custom exceptions used throughout the application.
Each exception is designed to provide clear, actionable error messages
and to distinguish between different failure modes.

Exception Hierarchy:
    SpotReverserError (base)
        ConfigError - Configuration issues (missing environment, bad config.yaml)
        SchedulerError - Scheduler has nothing left to run (fatal)
        SyncError - A remote call failed during a workflow run
            AuthError - Token exchange failed
            FetchError - Reading the source playlist failed
            ResetError - Clearing the destination playlist failed
            WriteError - Appending a batch to the destination failed
"""


class SpotReverserError(Exception):
    """
    Base exception for all spot-reverser errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all spot-reverser errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., playlist id, URL).

    Example:
        try:
            # some operation
        except SpotReverserError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'playlist_id': Spotify playlist involved in the error
                     - 'url': URL that caused the error
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotReverserError):
    """
    Raised when the configuration is incomplete or invalid.

    This is a CRITICAL error: it is raised before any network call is
    attempted and stops program execution.

    Common causes:
        - CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN, FROM or TO not set
        - FROM and TO point at the same playlist
        - config.yaml has invalid YAML syntax or invalid values

    Example:
        raise ConfigError(
            "Missing required environment variables: CLIENT_ID, TO",
            details={'missing': ['CLIENT_ID', 'TO']}
        )
    """
    pass


class SchedulerError(SpotReverserError):
    """
    Raised when the scheduler reports no upcoming jobs.

    This is a CRITICAL error. A normal workflow failure is logged and the
    process waits for the next tick; an empty schedule means the process
    has nothing left to do and must terminate with a non-zero status.
    """
    pass


class SyncError(SpotReverserError):
    """
    Base class for failures of a remote call during a workflow run.

    A SyncError aborts the current run only. The scheduler logs it and
    the next tick starts a fresh, independent run.

    Attributes:
        body: Raw response body text, read fully before raising.
              Empty when no response was received (transport failure).
        status_code: HTTP status of the failed response, or None.
    """

    def __init__(
        self,
        message: str,
        body: str = "",
        status_code: int | None = None,
        details: dict | None = None
    ) -> None:
        """
        Initialize a sync error with the failed response data.

        Args:
            message: Human-readable error description.
            body: Response body text returned by the API.
            status_code: HTTP status code of the response, if any.
            details: Optional dictionary with additional context.
        """
        super().__init__(message, details)
        self.body = body
        self.status_code = status_code

    def __str__(self) -> str:
        """Return the error message followed by the response body, if any."""
        if self.body:
            return f"{self.message}: {self.body}"
        return self.message


class AuthError(SyncError):
    """
    Raised when exchanging the refresh token for an access token fails.

    No further network call is made in the run after this error.

    Common causes:
        - Refresh token revoked or expired
        - Wrong client id / client secret
        - Token endpoint returned a body without 'access_token'
    """
    pass


class FetchError(SyncError):
    """
    Raised when a page of the source playlist cannot be read.

    Accumulation stops at the failing page; no partial listing is returned.
    """
    pass


class ResetError(SyncError):
    """Raised when the destination playlist cannot be cleared."""
    pass


class WriteError(SyncError):
    """
    Raised when appending a batch to the destination playlist fails.

    The destination is left with the batches written before the failure.
    The next run resets it again before writing.

    Example:
        raise WriteError(
            "Failed to add songs",
            body=response.text,
            status_code=429,
            details={'batch': ['spotify:track:a', 'spotify:track:b']}
        )
    """
    pass
