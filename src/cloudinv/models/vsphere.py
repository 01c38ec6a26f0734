"""vCenter filter and record models."""

from enum import Enum
from typing import Any

from pydantic import Field

from .base import ListFilter, Record


class PowerState(str, Enum):
    """Power state of a virtual machine or host."""

    POWERED_ON = "POWERED_ON"
    POWERED_OFF = "POWERED_OFF"
    SUSPENDED = "SUSPENDED"


class FolderType(str, Enum):
    """Type of a vCenter folder."""

    DATACENTER = "DATACENTER"
    DATASTORE = "DATASTORE"
    HOST = "HOST"
    NETWORK = "NETWORK"
    VIRTUAL_MACHINE = "VIRTUAL_MACHINE"


class HostConnectionState(str, Enum):
    """Connection state of a host."""

    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    NOT_RESPONDING = "NOT_RESPONDING"


class NetworkType(str, Enum):
    """Type of a vCenter network."""

    STANDARD_PORTGROUP = "STANDARD_PORTGROUP"
    DISTRIBUTED_PORTGROUP = "DISTRIBUTED_PORTGROUP"
    OPAQUE_NETWORK = "OPAQUE_NETWORK"


class DatastoreType(str, Enum):
    """Supported datastore types."""

    VMFS = "VMFS"
    NFS = "NFS"
    NFS41 = "NFS41"
    CIFS = "CIFS"
    VSAN = "VSAN"
    VFFS = "VFFS"
    VVOL = "VVOL"


class TaskStatus(str, Enum):
    """Status of a deployment operation."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    BLOCKED = "BLOCKED"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class DeploymentApplianceState(str, Enum):
    """Appliance state reported by the deployment endpoint."""

    NOT_INITIALIZED = "NOT_INITIALIZED"
    INITIALIZED = "INITIALIZED"
    CONFIG_IN_PROGRESS = "CONFIG_IN_PROGRESS"
    QUESTION_RAISED = "QUESTION_RAISED"
    FAILED = "FAILED"
    CONFIGURED = "CONFIGURED"


# Filters


class VMFilter(ListFilter):
    """Filter for ``GET /api/vcenter/vm``."""

    clusters: list[str] | None = Field(None, description="Cluster IDs")
    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    hosts: list[str] | None = Field(None, description="Host IDs")
    names: list[str] | None = Field(None, description="VM names")
    power_states: list[PowerState] | None = Field(None, description="Power states")
    resource_pools: list[str] | None = Field(None, description="Resource pool IDs")
    vms: list[str] | None = Field(None, description="VM IDs")


class ClusterFilter(ListFilter):
    """Filter for ``GET /api/vcenter/cluster``."""

    clusters: list[str] | None = Field(None, description="Cluster IDs")
    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    names: list[str] | None = Field(None, description="Cluster names")


class DatacenterFilter(ListFilter):
    """Filter for ``GET /api/vcenter/datacenter``."""

    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    names: list[str] | None = Field(None, description="Datacenter names")


class DatastoreFilter(ListFilter):
    """Filter for ``GET /api/vcenter/datastore``."""

    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    datastores: list[str] | None = Field(None, description="Datastore IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    names: list[str] | None = Field(None, description="Datastore names")
    types: list[DatastoreType] | None = Field(None, description="Datastore types")


class FolderFilter(ListFilter):
    """Filter for ``GET /api/vcenter/folder``.

    ``type`` is single-valued upstream, unlike every other field here.
    """

    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    names: list[str] | None = Field(None, description="Folder names")
    parent_folders: list[str] | None = Field(None, description="Parent folder IDs")
    type: FolderType | None = Field(None, description="Folder type")


class HostFilter(ListFilter):
    """Filter for ``GET /api/vcenter/host``."""

    clusters: list[str] | None = Field(None, description="Cluster IDs")
    connection_states: list[HostConnectionState] | None = Field(
        None, description="Connection states"
    )
    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    hosts: list[str] | None = Field(None, description="Host IDs")
    names: list[str] | None = Field(None, description="Host names")
    standalone: bool | None = Field(None, description="Only standalone hosts")


class NetworkFilter(ListFilter):
    """Filter for ``GET /api/vcenter/network``."""

    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    folders: list[str] | None = Field(None, description="Folder IDs")
    names: list[str] | None = Field(None, description="Network names")
    networks: list[str] | None = Field(None, description="Network IDs")
    types: list[NetworkType] | None = Field(None, description="Network types")


class ResourcePoolFilter(ListFilter):
    """Filter for ``GET /api/vcenter/resource-pool``."""

    clusters: list[str] | None = Field(None, description="Cluster IDs")
    datacenters: list[str] | None = Field(None, description="Datacenter IDs")
    hosts: list[str] | None = Field(None, description="Host IDs")
    names: list[str] | None = Field(None, description="Resource pool names")
    parent_resource_pools: list[str] | None = Field(
        None, description="Parent resource pool IDs"
    )
    resource_pools: list[str] | None = Field(None, description="Resource pool IDs")


# Records


class VM(Record):
    """Virtual machine summary."""

    vm: str | None = None
    name: str | None = None
    power_state: str | None = None
    cpu_count: int | None = None
    memory_size_MiB: int | None = None


class Cluster(Record):
    """Cluster summary."""

    cluster: str | None = None
    name: str | None = None
    ha_enabled: bool | None = None
    drs_enabled: bool | None = None


class Datacenter(Record):
    """Datacenter summary."""

    datacenter: str | None = None
    name: str | None = None


class Datastore(Record):
    """Datastore summary."""

    datastore: str | None = None
    name: str | None = None
    type: str | None = None
    capacity: int | None = None
    free_space: int | None = None


class Folder(Record):
    """Folder summary."""

    folder: str | None = None
    name: str | None = None
    type: str | None = None


class Host(Record):
    """Host summary."""

    host: str | None = None
    name: str | None = None
    connection_state: str | None = None
    power_state: str | None = None


class Network(Record):
    """Network summary."""

    network: str | None = None
    name: str | None = None
    type: str | None = None


class ResourcePool(Record):
    """Resource pool summary."""

    resource_pool: str | None = None
    name: str | None = None


class DeploymentInfo(Record):
    """Appliance deployment status."""

    service: str | None = None
    operation: str | None = None
    status: str | None = None
    state: str | None = None
    cancelable: bool | None = None
    description: dict[str, Any] | None = None
    progress: dict[str, Any] | None = None
    start_time: str | None = None
    end_time: str | None = None
    subtask_order: list[str] | None = None
    subtasks: dict[str, Any] | None = None
