"""vCenter REST API client."""

import logging
from typing import Any

import httpx

from .auth import SESSION_HEADER, VSphereAuthHandler
from .base import BaseClient, RecordT
from .exceptions import AuthenticationError
from .query import build_query_string
from ..models.base import ListFilter
from ..models.config import ProfileConfig
from ..models.vsphere import (
    VM,
    Cluster,
    ClusterFilter,
    Datacenter,
    DatacenterFilter,
    Datastore,
    DatastoreFilter,
    DeploymentInfo,
    Folder,
    FolderFilter,
    Host,
    HostFilter,
    Network,
    NetworkFilter,
    ResourcePool,
    ResourcePoolFilter,
    VMFilter,
)

logger = logging.getLogger(__name__)


class VSphereClient(BaseClient):
    """Async client for the vCenter REST API.

    The session id obtained by :meth:`authenticate` is kept for the lifetime
    of the instance. It is never refreshed automatically: once it expires,
    list calls fail with :class:`RequestError` and the caller decides whether
    to authenticate again.
    """

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        verify_ssl: bool = True,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize vCenter client.

        Args:
            host: vCenter host name or address
            user: Username
            password: Password
            verify_ssl: Whether to verify the server certificate
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        super().__init__(
            f"https://{host}", verify_ssl=verify_ssl, timeout=timeout, transport=transport
        )
        self.host = host
        self.auth_handler = VSphereAuthHandler(self.base_url, user, password)
        self.session_id: str | None = None

    @classmethod
    def from_profile(
        cls, profile: ProfileConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "VSphereClient":
        """Build a client from a stored profile.

        Args:
            profile: vSphere profile configuration
            transport: Custom httpx transport

        Returns:
            Unauthenticated client
        """
        return cls(
            host=profile.host or "",
            user=profile.auth.user or "",
            password=profile.auth.password or "",
            verify_ssl=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "VSphereClient":
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def authenticate(self) -> None:
        """Create a session and keep its id.

        Raises:
            AuthenticationError: If the session endpoint rejects the credentials
        """
        self.session_id = await self.auth_handler.create_session(self._http())
        logger.debug("Authenticated to vCenter %s", self.host)

    async def ensure_authenticated(self) -> None:
        """Authenticate if no session id is held.

        Raises:
            AuthenticationError: If no session id could be obtained
        """
        if not self.session_id:
            await self.authenticate()
        if not self.session_id:
            raise AuthenticationError("no session id")

    async def logout(self) -> None:
        """Delete the current session, if any."""
        if not self.session_id:
            return
        await self.auth_handler.delete_session(self._http(), self.session_id)
        self.session_id = None

    async def _list(
        self,
        resource: str,
        endpoint: str,
        model: type[RecordT],
        params: ListFilter | None = None,
    ) -> list[RecordT]:
        """List a resource kind, optionally filtered server-side.

        Args:
            resource: Resource kind, used in error messages
            endpoint: API path under the base URL
            model: Record model to decode items into
            params: Filter object

        Returns:
            Records as returned by the server
        """
        await self.ensure_authenticated()

        url = f"{self.base_url}{endpoint}"
        if params is not None:
            query = build_query_string(params.to_params())
            if query:
                url = f"{url}?{query}"

        data = await self._get_json(resource, url, {SESSION_HEADER: self.session_id or ""})
        return self._decode_records(resource, data, model)

    async def get_vms(self, params: VMFilter | None = None) -> list[VM]:
        """Get list of virtual machines.

        Args:
            params: Optional cluster, datacenter, folder, host, name, power
                state, resource pool and VM ID filters

        Returns:
            List of VMs
        """
        return await self._list("VMs", "/api/vcenter/vm", VM, params)

    async def get_clusters(self, params: ClusterFilter | None = None) -> list[Cluster]:
        """Get list of clusters.

        Args:
            params: Optional cluster, datacenter, folder and name filters

        Returns:
            List of clusters
        """
        return await self._list("Clusters", "/api/vcenter/cluster", Cluster, params)

    async def get_datacenters(self, params: DatacenterFilter | None = None) -> list[Datacenter]:
        """Get list of datacenters.

        Args:
            params: Optional datacenter, folder and name filters

        Returns:
            List of datacenters
        """
        return await self._list("DataCenters", "/api/vcenter/datacenter", Datacenter, params)

    async def get_datastores(self, params: DatastoreFilter | None = None) -> list[Datastore]:
        """Get list of datastores.

        Args:
            params: Optional datacenter, datastore, folder, name and type filters

        Returns:
            List of datastores
        """
        return await self._list("Datastores", "/api/vcenter/datastore", Datastore, params)

    async def get_folders(self, params: FolderFilter | None = None) -> list[Folder]:
        """Get list of folders.

        Args:
            params: Optional datacenter, folder, name, parent folder and type filters

        Returns:
            List of folders
        """
        return await self._list("Folders", "/api/vcenter/folder", Folder, params)

    async def get_deployments(self) -> list[DeploymentInfo]:
        """Get appliance deployment information.

        Returns:
            Deployment information (one entry per reported deployment)
        """
        resource = "Deployment Information"
        await self.ensure_authenticated()
        data: Any = await self._get_json(
            resource,
            f"{self.base_url}/api/vcenter/deployment",
            {SESSION_HEADER: self.session_id or ""},
        )
        # The endpoint reports a single object on current vCenter releases
        if isinstance(data, dict):
            data = [data]
        return self._decode_records(resource, data, DeploymentInfo)

    async def get_hosts(self, params: HostFilter | None = None) -> list[Host]:
        """Get list of hosts.

        Args:
            params: Optional cluster, connection state, datacenter, folder,
                host, name and standalone filters

        Returns:
            List of hosts
        """
        return await self._list("Hosts", "/api/vcenter/host", Host, params)

    async def get_networks(self, params: NetworkFilter | None = None) -> list[Network]:
        """Get list of networks.

        Args:
            params: Optional datacenter, folder, name, network and type filters

        Returns:
            List of networks
        """
        return await self._list("Networks", "/api/vcenter/network", Network, params)

    async def get_resource_pools(
        self, params: ResourcePoolFilter | None = None
    ) -> list[ResourcePool]:
        """Get list of resource pools.

        Args:
            params: Optional cluster, datacenter, host, name, parent pool and
                resource pool filters

        Returns:
            List of resource pools
        """
        return await self._list(
            "Resource Pools", "/api/vcenter/resource-pool", ResourcePool, params
        )
