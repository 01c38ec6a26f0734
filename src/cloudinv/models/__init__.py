"""Data models."""

from .azure import Location, ResourceSku, SkuFilter, VirtualMachineSize
from .config import AuthConfig, OutputConfig, ProfileConfig
from .vsphere import (
    VM,
    Cluster,
    ClusterFilter,
    Datacenter,
    DatacenterFilter,
    Datastore,
    DatastoreFilter,
    DatastoreType,
    DeploymentApplianceState,
    DeploymentInfo,
    Folder,
    FolderFilter,
    FolderType,
    Host,
    HostConnectionState,
    HostFilter,
    Network,
    NetworkFilter,
    NetworkType,
    PowerState,
    ResourcePool,
    ResourcePoolFilter,
    TaskStatus,
    VMFilter,
)

__all__ = [
    "AuthConfig",
    "Cluster",
    "ClusterFilter",
    "Datacenter",
    "DatacenterFilter",
    "Datastore",
    "DatastoreFilter",
    "DatastoreType",
    "DeploymentApplianceState",
    "DeploymentInfo",
    "Folder",
    "FolderFilter",
    "FolderType",
    "Host",
    "HostConnectionState",
    "HostFilter",
    "Location",
    "Network",
    "NetworkFilter",
    "NetworkType",
    "OutputConfig",
    "PowerState",
    "ProfileConfig",
    "ResourcePool",
    "ResourcePoolFilter",
    "ResourceSku",
    "SkuFilter",
    "TaskStatus",
    "VM",
    "VMFilter",
    "VirtualMachineSize",
]
