"""vCenter inventory commands."""

import typer

from ..api.exceptions import CloudInvError
from ..api.vsphere import VSphereClient
from ..config import ConfigManager
from ..models.vsphere import (
    ClusterFilter,
    DatacenterFilter,
    DatastoreFilter,
    DatastoreType,
    FolderFilter,
    FolderType,
    HostConnectionState,
    HostFilter,
    NetworkFilter,
    NetworkType,
    PowerState,
    ResourcePoolFilter,
    VMFilter,
)
from ..utils import (
    colored_status,
    format_bytes,
    format_percentage,
    parse_enum_csv,
    print_error,
    print_records,
    split_csv,
)
from ..utils.helpers import async_to_sync, ordered_group
from ._shared import get_profile, output_format, yes_no

app = typer.Typer(
    help="List vCenter inventory",
    epilog="Filter options take comma-separated values. Write a comma inside a value as \\,",
    no_args_is_help=True,
    cls=ordered_group(
        [
            "vms",
            "hosts",
            "clusters",
            "datacenters",
            "datastores",
            "networks",
            "folders",
            "resource-pools",
            "deployments",
        ]
    ),
)

PROFILE_HELP = "Profile to use"
OUTPUT_HELP = "Output format: table, json, yaml"


def _datastore_free(ds) -> str:
    if ds.free_space is None:
        return "-"
    if ds.capacity:
        return f"{format_bytes(ds.free_space)} ({format_percentage(ds.free_space / ds.capacity * 100)})"
    return format_bytes(ds.free_space)


VM_COLUMNS = [
    ("VM", "cyan", lambda vm: vm.vm or "-"),
    ("Name", "", lambda vm: vm.name or "-"),
    ("Power", "", lambda vm: colored_status(vm.power_state)),
    ("CPUs", "", lambda vm: str(vm.cpu_count) if vm.cpu_count is not None else "-"),
    (
        "Memory",
        "",
        lambda vm: format_bytes(vm.memory_size_MiB * 1024 * 1024)
        if vm.memory_size_MiB is not None
        else "-",
    ),
]

CLUSTER_COLUMNS = [
    ("Cluster", "cyan", lambda c: c.cluster or "-"),
    ("Name", "", lambda c: c.name or "-"),
    ("HA", "", lambda c: yes_no(c.ha_enabled)),
    ("DRS", "", lambda c: yes_no(c.drs_enabled)),
]

DATACENTER_COLUMNS = [
    ("Datacenter", "cyan", lambda d: d.datacenter or "-"),
    ("Name", "", lambda d: d.name or "-"),
]

DATASTORE_COLUMNS = [
    ("Datastore", "cyan", lambda ds: ds.datastore or "-"),
    ("Name", "", lambda ds: ds.name or "-"),
    ("Type", "", lambda ds: ds.type or "-"),
    ("Capacity", "", lambda ds: format_bytes(ds.capacity)),
    ("Free", "", _datastore_free),
]

FOLDER_COLUMNS = [
    ("Folder", "cyan", lambda f: f.folder or "-"),
    ("Name", "", lambda f: f.name or "-"),
    ("Type", "", lambda f: f.type or "-"),
]

HOST_COLUMNS = [
    ("Host", "cyan", lambda h: h.host or "-"),
    ("Name", "", lambda h: h.name or "-"),
    ("Connection", "", lambda h: colored_status(h.connection_state)),
    ("Power", "", lambda h: colored_status(h.power_state)),
]

NETWORK_COLUMNS = [
    ("Network", "cyan", lambda n: n.network or "-"),
    ("Name", "", lambda n: n.name or "-"),
    ("Type", "", lambda n: n.type or "-"),
]

RESOURCE_POOL_COLUMNS = [
    ("Resource Pool", "cyan", lambda rp: rp.resource_pool or "-"),
    ("Name", "", lambda rp: rp.name or "-"),
]

DEPLOYMENT_COLUMNS = [
    ("Service", "cyan", lambda d: d.service or "-"),
    ("Operation", "", lambda d: d.operation or "-"),
    ("Status", "", lambda d: colored_status(d.status)),
    ("State", "", lambda d: colored_status(d.state)),
]


@app.command("vms")
@async_to_sync
async def list_vms(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated VM names"),
    vms: str = typer.Option(None, "--vms", help="Comma-separated VM IDs"),
    power_states: str = typer.Option(
        None, "--power-states", "-s", help="Comma-separated power states (POWERED_ON, ...)"
    ),
    clusters: str = typer.Option(None, "--clusters", help="Comma-separated cluster IDs"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    hosts: str = typer.Option(None, "--hosts", help="Comma-separated host IDs"),
    resource_pools: str = typer.Option(
        None, "--resource-pools", help="Comma-separated resource pool IDs"
    ),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List virtual machines."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = VMFilter(
            clusters=split_csv(clusters),
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            hosts=split_csv(hosts),
            names=split_csv(names),
            power_states=parse_enum_csv(power_states, PowerState, "--power-states"),
            resource_pools=split_csv(resource_pools),
            vms=split_csv(vms),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_vms(params)

        print_records(records, VM_COLUMNS, fmt, title="Virtual Machines")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("clusters")
@async_to_sync
async def list_clusters(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated cluster names"),
    clusters: str = typer.Option(None, "--clusters", help="Comma-separated cluster IDs"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List clusters."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = ClusterFilter(
            clusters=split_csv(clusters),
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            names=split_csv(names),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_clusters(params)

        print_records(records, CLUSTER_COLUMNS, fmt, title="Clusters")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("datacenters")
@async_to_sync
async def list_datacenters(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated datacenter names"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List datacenters."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = DatacenterFilter(
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            names=split_csv(names),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_datacenters(params)

        print_records(records, DATACENTER_COLUMNS, fmt, title="Datacenters")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("datastores")
@async_to_sync
async def list_datastores(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated datastore names"),
    datastores: str = typer.Option(None, "--datastores", help="Comma-separated datastore IDs"),
    types: str = typer.Option(None, "--types", "-t", help="Comma-separated types (VMFS, NFS, ...)"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List datastores."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = DatastoreFilter(
            datacenters=split_csv(datacenters),
            datastores=split_csv(datastores),
            folders=split_csv(folders),
            names=split_csv(names),
            types=parse_enum_csv(types, DatastoreType, "--types"),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_datastores(params)

        print_records(records, DATASTORE_COLUMNS, fmt, title="Datastores")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("folders")
@async_to_sync
async def list_folders(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated folder names"),
    folder_type: str = typer.Option(
        None, "--type", "-t", help="Folder type (DATACENTER, DATASTORE, HOST, NETWORK, VIRTUAL_MACHINE)"
    ),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    parent_folders: str = typer.Option(
        None, "--parent-folders", help="Comma-separated parent folder IDs"
    ),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List folders."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        parsed_type = parse_enum_csv(folder_type, FolderType, "--type")
        if parsed_type and len(parsed_type) > 1:
            raise typer.BadParameter("only one folder type can be given", param_hint="--type")
        params = FolderFilter(
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            names=split_csv(names),
            parent_folders=split_csv(parent_folders),
            type=parsed_type[0] if parsed_type else None,
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_folders(params)

        print_records(records, FOLDER_COLUMNS, fmt, title="Folders")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("deployments")
@async_to_sync
async def list_deployments(
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show appliance deployment status."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_deployments()

        print_records(records, DEPLOYMENT_COLUMNS, fmt, title="Deployments")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("hosts")
@async_to_sync
async def list_hosts(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated host names"),
    hosts: str = typer.Option(None, "--hosts", help="Comma-separated host IDs"),
    connection_states: str = typer.Option(
        None, "--connection-states", "-s", help="Comma-separated states (CONNECTED, ...)"
    ),
    standalone: bool = typer.Option(
        None, "--standalone/--clustered", help="Only standalone (or only clustered) hosts"
    ),
    clusters: str = typer.Option(None, "--clusters", help="Comma-separated cluster IDs"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List hosts."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = HostFilter(
            clusters=split_csv(clusters),
            connection_states=parse_enum_csv(
                connection_states, HostConnectionState, "--connection-states"
            ),
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            hosts=split_csv(hosts),
            names=split_csv(names),
            standalone=standalone,
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_hosts(params)

        print_records(records, HOST_COLUMNS, fmt, title="Hosts")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("networks")
@async_to_sync
async def list_networks(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated network names"),
    networks: str = typer.Option(None, "--networks", help="Comma-separated network IDs"),
    types: str = typer.Option(
        None, "--types", "-t", help="Comma-separated types (STANDARD_PORTGROUP, ...)"
    ),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    folders: str = typer.Option(None, "--folders", help="Comma-separated folder IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List networks."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = NetworkFilter(
            datacenters=split_csv(datacenters),
            folders=split_csv(folders),
            names=split_csv(names),
            networks=split_csv(networks),
            types=parse_enum_csv(types, NetworkType, "--types"),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_networks(params)

        print_records(records, NETWORK_COLUMNS, fmt, title="Networks")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("resource-pools")
@async_to_sync
async def list_resource_pools(
    names: str = typer.Option(None, "--names", "-n", help="Comma-separated resource pool names"),
    resource_pools: str = typer.Option(
        None, "--resource-pools", help="Comma-separated resource pool IDs"
    ),
    parent_resource_pools: str = typer.Option(
        None, "--parent-resource-pools", help="Comma-separated parent resource pool IDs"
    ),
    clusters: str = typer.Option(None, "--clusters", help="Comma-separated cluster IDs"),
    datacenters: str = typer.Option(None, "--datacenters", help="Comma-separated datacenter IDs"),
    hosts: str = typer.Option(None, "--hosts", help="Comma-separated host IDs"),
    profile: str = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    output: str = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List resource pools."""
    config_manager = ConfigManager()

    try:
        profile_config = get_profile(config_manager, profile, "vsphere")
        fmt = output_format(config_manager, output)
        params = ResourcePoolFilter(
            clusters=split_csv(clusters),
            datacenters=split_csv(datacenters),
            hosts=split_csv(hosts),
            names=split_csv(names),
            parent_resource_pools=split_csv(parent_resource_pools),
            resource_pools=split_csv(resource_pools),
        )

        async with VSphereClient.from_profile(profile_config) as client:
            records = await client.get_resource_pools(params)

        print_records(records, RESOURCE_POOL_COLUMNS, fmt, title="Resource Pools")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)
