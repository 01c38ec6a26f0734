"""Authentication handling for the vCenter and Azure APIs."""

import logging

import httpx
from azure.core.exceptions import ClientAuthenticationError
from azure.identity.aio import ClientSecretCredential

from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

AZURE_MGMT_URL = "https://management.azure.com"
AZURE_MGMT_SCOPE = f"{AZURE_MGMT_URL}/.default"

SESSION_HEADER = "vmware-api-session-id"


class VSphereAuthHandler:
    """Exchange vCenter credentials for a session id."""

    def __init__(self, base_url: str, user: str, password: str) -> None:
        """Initialize auth handler.

        Args:
            base_url: vCenter base URL (``https://host``)
            user: Username
            password: Password
        """
        self.base_url = base_url
        self.user = user
        self._password = password

    async def create_session(self, client: httpx.AsyncClient) -> str:
        """Create an API session using HTTP Basic authentication.

        Args:
            client: HTTP client to send the request with

        Returns:
            Session id

        Raises:
            AuthenticationError: If authentication fails
        """
        try:
            response = await client.post(
                f"{self.base_url}/api/session",
                auth=(self.user, self._password),
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error("Failed to authenticate with vSphere API: %s", e)
            raise AuthenticationError(f"Connection failed: {e}")

        if not response.is_success:
            logger.error(
                "Failed to authenticate with vSphere API: HTTP %s %s",
                response.status_code,
                response.reason_phrase,
            )
            raise AuthenticationError(response.reason_phrase, status_code=response.status_code)

        try:
            session_id = response.json()
        except ValueError:
            raise AuthenticationError("Invalid response from server")
        if not isinstance(session_id, str) or not session_id:
            raise AuthenticationError("Invalid response from server")

        return session_id

    async def delete_session(self, client: httpx.AsyncClient, session_id: str) -> None:
        """Terminate an API session.

        Args:
            client: HTTP client to send the request with
            session_id: Session id to invalidate

        Raises:
            AuthenticationError: If the session could not be deleted
        """
        try:
            response = await client.delete(
                f"{self.base_url}/api/session", headers={SESSION_HEADER: session_id}
            )
        except httpx.RequestError as e:
            raise AuthenticationError(f"Connection failed: {e}")

        # An already expired session is as good as a deleted one.
        if not response.is_success and response.status_code != 401:
            raise AuthenticationError(
                f"Logout failed: {response.reason_phrase}", status_code=response.status_code
            )


class AzureAuthHandler:
    """Acquire ARM bearer tokens with the OAuth2 client-credentials flow."""

    def __init__(self, tenant_id: str, client_id: str, client_secret: str) -> None:
        """Initialize auth handler.

        Args:
            tenant_id: Directory (tenant) ID the application is registered in
            client_id: Application (client) ID
            client_secret: Client secret
        """
        self.tenant_id = tenant_id
        self.client_id = client_id
        self._client_secret = client_secret

    async def get_token(self) -> str:
        """Request an access token for the management API.

        Returns:
            Bearer token

        Raises:
            AuthenticationError: If the token request fails
        """
        try:
            credential = ClientSecretCredential(self.tenant_id, self.client_id, self._client_secret)
        except ValueError as e:
            raise AuthenticationError(f"Invalid credentials: {e}")

        async with credential:
            try:
                token = await credential.get_token(AZURE_MGMT_SCOPE)
            except ClientAuthenticationError as e:
                logger.error("Failed to authenticate with Azure API: %s", e.message)
                raise AuthenticationError(f"Authentication failed: {e.message}")

        return token.token
