"""Azure subscription and compute metadata commands."""

import typer

from ..api.exceptions import CloudInvError
from ..config import ConfigManager
from ..models.azure import SkuFilter
from ..utils import print_error, print_records
from ..utils.helpers import async_to_sync, ordered_group
from ._shared import connect_azure, get_profile, output_format

app = typer.Typer(
    help="List Azure locations, SKUs and VM sizes",
    no_args_is_help=True,
    cls=ordered_group(["locations", "skus", "vm-sizes"]),
)

PROFILE_HELP = "Profile to use"
OUTPUT_HELP = "Output format: table, json, yaml"


def _restricted(sku) -> str:
    if not sku.restrictions:
        return "-"
    reasons = {r.get("reasonCode") or r.get("type") or "?" for r in sku.restrictions}
    return f"[red]{', '.join(sorted(reasons))}[/red]"


LOCATION_COLUMNS = [
    ("Name", "cyan", lambda loc: loc.name or "-"),
    ("Display Name", "", lambda loc: loc.display_name or "-"),
    ("Region", "", lambda loc: (loc.metadata or {}).get("geographyGroup") or "-"),
]

SKU_COLUMNS = [
    ("Name", "cyan", lambda sku: sku.name or "-"),
    ("Resource Type", "", lambda sku: sku.resource_type or "-"),
    ("Tier", "", lambda sku: sku.tier or "-"),
    ("Family", "", lambda sku: sku.family or "-"),
    ("vCPUs", "", lambda sku: sku.capability("vCPUs") or "-"),
    ("Memory GB", "", lambda sku: sku.capability("MemoryGB") or "-"),
    ("Locations", "", lambda sku: ", ".join(sku.locations or []) or "-"),
    ("Restrictions", "", _restricted),
]

VM_SIZE_COLUMNS = [
    ("Name", "cyan", lambda s: s.name or "-"),
    ("Cores", "", lambda s: str(s.number_of_cores) if s.number_of_cores is not None else "-"),
    ("Memory MB", "", lambda s: str(s.memory_in_mb) if s.memory_in_mb is not None else "-"),
    (
        "Max Disks",
        "",
        lambda s: str(s.max_data_disk_count) if s.max_data_disk_count is not None else "-",
    ),
    (
        "OS Disk MB",
        "",
        lambda s: str(s.os_disk_size_in_mb) if s.os_disk_size_in_mb is not None else "-",
    ),
    (
        "Temp Disk MB",
        "",
        lambda s: str(s.resource_disk_size_in_mb)
        if s.resource_disk_size_in_mb is not None
        else "-",
    ),
]


@app.command("locations")
@async_to_sync
async def list_locations(
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List locations available to the subscription."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "azure")
        fmt = output_format(config_manager, output)

        async with await connect_azure(profile_config) as client:
            records = await client.get_locations()

        print_records(records, LOCATION_COLUMNS, fmt, title="Locations")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("skus")
@async_to_sync
async def list_skus(
    location: str = typer.Option(None, "--location", "-l", help="Location, e.g. westus2"),
    resource_type: str = typer.Option(
        None, "--resource-type", "-t", help="Resource type, e.g. virtualMachines"
    ),
    vm_size: str = typer.Option(None, "--vm-size", "-s", help="SKU name, e.g. Standard_D2s_v3"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List compute resource SKUs."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "azure")
        fmt = output_format(config_manager, output)
        params = SkuFilter(location=location, resource_type=resource_type, vm_size=vm_size)

        async with await connect_azure(profile_config) as client:
            records = await client.list_resource_skus(params)

        print_records(records, SKU_COLUMNS, fmt, title="Resource SKUs")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("vm-sizes")
@async_to_sync
async def list_vm_sizes(
    location: str = typer.Argument(..., help="Location, e.g. westus2"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List VM sizes available in a location."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "azure")
        fmt = output_format(config_manager, output)

        async with await connect_azure(profile_config) as client:
            records = await client.get_virtual_machine_sizes(location)

        print_records(records, VM_SIZE_COLUMNS, fmt, title="VM Sizes")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)
