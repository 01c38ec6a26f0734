"""Custom exceptions for cloudinv API interactions."""


class CloudInvError(Exception):
    """Base exception for cloudinv."""

    pass


class ConfigError(CloudInvError):
    """Configuration related errors."""

    pass


class AuthenticationError(CloudInvError):
    """Authentication failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize authentication error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the session endpoint
        """
        super().__init__(message)
        self.status_code = status_code


class APIError(CloudInvError):
    """General API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.status_code = status_code


class RequestError(APIError):
    """A list endpoint answered with a non-success status."""

    def __init__(self, resource: str, status_code: int, message: str = "") -> None:
        """Initialize request error.

        Args:
            resource: Resource kind being listed (VMs, Clusters, etc.)
            status_code: HTTP status code
            message: Upstream status text or error message
        """
        text = f"Failed to get {resource}: HTTP {status_code}"
        if message:
            text = f"{text} {message}"
        super().__init__(text, status_code=status_code)
        self.resource = resource
        self.message = message


class DecodeError(APIError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, resource: str, message: str) -> None:
        """Initialize decode error.

        Args:
            resource: Resource kind being listed
            message: What was wrong with the body
        """
        super().__init__(f"Invalid response for {resource}: {message}")
        self.resource = resource


class NetworkError(CloudInvError):
    """Network related errors."""

    pass


class TimeoutError(CloudInvError):
    """Request timeout errors."""

    pass
