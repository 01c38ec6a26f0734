"""Azure Resource Manager client for subscription and compute metadata."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .auth import AZURE_MGMT_URL, AzureAuthHandler
from .base import BaseClient
from .exceptions import AuthenticationError
from .pagination import drain_pages
from ..models.azure import Location, ResourceSku, SkuFilter, VirtualMachineSize
from ..models.config import ProfileConfig

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_API_VERSION = "2022-12-01"
RESOURCE_SKUS_API_VERSION = "2021-07-01"
COMPUTE_API_VERSION = "2023-07-01"


class AzureClient(BaseClient):
    """Async client for the ARM location, SKU and VM size listings.

    Every listing drains all result pages before returning.
    """

    def __init__(
        self,
        subscription_id: str,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
        base_url: str = AZURE_MGMT_URL,
    ) -> None:
        """Initialize Azure client.

        Args:
            subscription_id: Subscription to query
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
            base_url: Resource Manager endpoint
        """
        super().__init__(base_url, timeout=timeout, transport=transport)
        self.subscription_id = subscription_id
        self.token: str | None = None
        self._auth_handler: AzureAuthHandler | None = None

    @classmethod
    def from_profile(
        cls, profile: ProfileConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "AzureClient":
        """Build a client from a stored profile.

        Args:
            profile: Azure profile configuration
            transport: Custom httpx transport

        Returns:
            Unauthenticated client
        """
        return cls(
            subscription_id=profile.subscription_id or "",
            timeout=profile.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AzureClient":
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def authenticate(self, client_id: str, client_secret: str, tenant_id: str) -> None:
        """Authenticate with a service principal client secret.

        Args:
            client_id: Application (client) ID
            client_secret: Client secret
            tenant_id: Directory (tenant) ID

        Raises:
            AuthenticationError: If the token request fails
        """
        self._auth_handler = AzureAuthHandler(tenant_id, client_id, client_secret)
        self.token = await self._auth_handler.get_token()
        logger.debug("Authenticated to Azure tenant %s", tenant_id)

    async def ensure_authenticated(self) -> None:
        """Acquire a token with the last supplied credentials if none is held.

        Raises:
            AuthenticationError: If credentials were never supplied or no
                token could be obtained
        """
        if not self.token:
            if self._auth_handler is None:
                raise AuthenticationError("Azure credentials not set")
            self.token = await self._auth_handler.get_token()
        if not self.token:
            raise AuthenticationError("no session id")

    def _subscription_url(self, path: str) -> str:
        return f"{self.base_url}/subscriptions/{self.subscription_id}{path}"

    async def _list_all(
        self, resource: str, url: str, params: dict[str, str]
    ) -> list[Any]:
        """Fetch every page of an ARM listing.

        Args:
            resource: Resource kind, used in error messages
            url: First page URL
            params: Query parameters of the first page

        Returns:
            Raw items of all pages
        """
        await self.ensure_authenticated()
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

        async def get_json(page_url: str, page_params: dict[str, str] | None) -> Any:
            return await self._get_json(resource, page_url, headers, page_params)

        return await drain_pages(resource, url, get_json, params)

    async def get_locations(self) -> list[Location]:
        """Get all locations available to the subscription.

        Returns:
            List of locations
        """
        resource = "Locations"
        items = await self._list_all(
            resource,
            self._subscription_url("/locations"),
            {"api-version": SUBSCRIPTIONS_API_VERSION},
        )
        return self._decode_records(resource, items, Location)

    async def get_resource_skus(
        self,
        location: str | None = None,
        resource_type: str | None = None,
        vm_size: str | None = None,
    ) -> list[ResourceSku]:
        """Get resource SKUs, optionally narrowed by location, type and size.

        Args:
            location: Location name, filtered by ARM
            resource_type: Resource type, filtered client-side
            vm_size: SKU name, filtered client-side

        Returns:
            List of resource SKUs
        """
        return await self.list_resource_skus(
            SkuFilter(location=location, resource_type=resource_type, vm_size=vm_size)
        )

    async def list_resource_skus(self, params: SkuFilter | None = None) -> list[ResourceSku]:
        """Get resource SKUs matching a filter object.

        Args:
            params: SKU filter

        Returns:
            List of resource SKUs
        """
        resource = "Resource SKUs"
        params = params or SkuFilter()

        query = {"api-version": RESOURCE_SKUS_API_VERSION}
        odata_filter = params.odata_filter()
        if odata_filter:
            query["$filter"] = odata_filter

        items = await self._list_all(
            resource, self._subscription_url("/providers/Microsoft.Compute/skus"), query
        )
        skus = self._decode_records(resource, items, ResourceSku)

        # ARM cannot filter SKUs by resource type or size
        if params.needs_post_filter:
            skus = [sku for sku in skus if params.matches(sku)]
            logger.debug("%d SKUs left after client-side filtering", len(skus))

        return skus

    async def get_virtual_machine_sizes(self, location: str) -> list[VirtualMachineSize]:
        """Get VM sizes available in a location.

        Args:
            location: Location name

        Returns:
            List of VM sizes
        """
        resource = "Virtual Machine Sizes"
        items = await self._list_all(
            resource,
            self._subscription_url(
                f"/providers/Microsoft.Compute/locations/{quote(location, safe='')}/vmSizes"
            ),
            {"api-version": COMPUTE_API_VERSION},
        )
        return self._decode_records(resource, items, VirtualMachineSize)
