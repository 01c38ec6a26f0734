"""Azure Resource Manager filter and record models."""

from typing import Any

from pydantic import Field

from .base import ListFilter, Record


class SkuFilter(ListFilter):
    """Filter for the compute resource SKU listing.

    Only ``location`` is applied by ARM. ``resource_type`` and ``vm_size``
    are matched client-side on the fetched SKUs.
    """

    location: str | None = Field(None, description="Region name, e.g. westus2")
    resource_type: str | None = Field(None, description="Resource type, e.g. virtualMachines")
    vm_size: str | None = Field(None, description="SKU name, e.g. Standard_D2s_v3")

    def odata_filter(self) -> str | None:
        """Return the server-side ``$filter`` expression, if any."""
        if self.location:
            return f"location eq '{self.location}'"
        return None

    def matches(self, sku: "ResourceSku") -> bool:
        """Check the fields ARM cannot filter on (exact, case-sensitive)."""
        if self.resource_type and sku.resource_type != self.resource_type:
            return False
        if self.vm_size and sku.name != self.vm_size:
            return False
        return True

    @property
    def needs_post_filter(self) -> bool:
        """Whether any client-side field is set."""
        return bool(self.resource_type or self.vm_size)


class Location(Record):
    """Subscription location."""

    id: str | None = None
    name: str | None = None
    display_name: str | None = Field(None, alias="displayName")
    regional_display_name: str | None = Field(None, alias="regionalDisplayName")
    latitude: str | None = None
    longitude: str | None = None
    metadata: dict[str, Any] | None = None


class ResourceSku(Record):
    """Compute resource SKU."""

    resource_type: str | None = Field(None, alias="resourceType")
    name: str | None = None
    tier: str | None = None
    size: str | None = None
    family: str | None = None
    kind: str | None = None
    locations: list[str] | None = None
    location_info: list[dict[str, Any]] | None = Field(None, alias="locationInfo")
    capabilities: list[dict[str, Any]] | None = None
    restrictions: list[dict[str, Any]] | None = None

    def capability(self, name: str) -> str | None:
        """Return the value of a named capability, if present."""
        for cap in self.capabilities or []:
            if cap.get("name") == name:
                return cap.get("value")
        return None


class VirtualMachineSize(Record):
    """VM size available in a location."""

    name: str | None = None
    number_of_cores: int | None = Field(None, alias="numberOfCores")
    os_disk_size_in_mb: int | None = Field(None, alias="osDiskSizeInMB")
    resource_disk_size_in_mb: int | None = Field(None, alias="resourceDiskSizeInMB")
    memory_in_mb: int | None = Field(None, alias="memoryInMB")
    max_data_disk_count: int | None = Field(None, alias="maxDataDiskCount")
