"""Configuration management commands for cloudinv."""

from getpass import getpass

import typer
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from ..api.azure import AzureClient
from ..api.exceptions import CloudInvError
from ..api.vsphere import VSphereClient
from ..config import AuthConfig, ConfigManager, ProfileConfig
from ..utils import (
    confirm,
    console,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    print_warning,
    prompt,
)
from ..utils.helpers import async_to_sync, ordered_group
from ..utils.menu import multi_select_menu, select_value

app = typer.Typer(
    help="Manage cloudinv configuration",
    no_args_is_help=True,
    cls=ordered_group(["add", "list", "show", "default", "test", "remove"]),
)

PROVIDERS = ["vsphere", "azure"]


# ── Shared helpers ───────────────────────────────────────────────────────


def _pick_profile(config_manager: ConfigManager) -> str | None:
    """Interactive single-select for a profile. Returns profile name or None."""
    try:
        config = config_manager.get()
    except CloudInvError:
        print_info("No configuration found. Run 'cloudinv config add' first.")
        return None

    if not config.profiles:
        print_info("No profiles configured. Run 'cloudinv config add' to create one.")
        return None

    name = select_value(sorted(config.profiles.keys()), "  Select profile:")
    if name is None:
        print_cancelled()
    return name


def _check_profile_exists(config_manager: ConfigManager, name: str) -> None:
    """Raise typer.Exit if profile already exists."""
    if not config_manager.exists():
        return
    try:
        profiles = config_manager.get().profiles
    except CloudInvError:
        return
    if name in profiles:
        print_error(f"Profile '{name}' already exists. Remove it first to replace it.")
        raise typer.Exit(1)


def _prompt_required(label: str, secret: bool = False) -> str:
    """Prompt until a non-empty value is entered."""
    while True:
        value = getpass(f"{label}: ") if secret else prompt(label)
        if value:
            return value
        print_error(f"{label} is required")


def _collect_profile_values(config_values: dict, verify_ssl: bool) -> tuple[dict, bool]:
    """Prompt for whatever the command line left out."""
    console.print("\n[bold cyan]═══ Profile Setup ═══[/bold cyan]\n")

    if config_values["provider"] is None:
        provider = select_value(PROVIDERS, "  Provider:")
        if provider is None:
            print_cancelled()
            raise typer.Exit()
        config_values["provider"] = provider

    if config_values["provider"] == "vsphere":
        if config_values["host"] is None:
            config_values["host"] = _prompt_required("vCenter host (IP or hostname)")
        if config_values["user"] is None:
            config_values["user"] = prompt("Username", default="administrator@vsphere.local")
        if config_values["password"] is None:
            config_values["password"] = _prompt_required("Password", secret=True)
        if verify_ssl:
            verify_ssl = confirm("Verify SSL certificate", default=True)
    else:
        if config_values["subscription_id"] is None:
            config_values["subscription_id"] = _prompt_required("Subscription ID")
        if config_values["tenant_id"] is None:
            config_values["tenant_id"] = _prompt_required("Tenant ID")
        if config_values["client_id"] is None:
            config_values["client_id"] = _prompt_required("Client ID")
        if config_values["client_secret"] is None:
            config_values["client_secret"] = _prompt_required("Client secret", secret=True)

    return config_values, verify_ssl


def _needs_interactive(config_values: dict) -> bool:
    """Check whether any value required by the provider is missing."""
    provider = config_values["provider"]
    if provider is None:
        return True
    if provider == "vsphere":
        required = ("host", "user", "password")
    else:
        required = ("subscription_id", "tenant_id", "client_id", "client_secret")
    return any(not config_values.get(k) for k in required)


def _create_profile(config_values: dict, verify_ssl: bool, timeout: int) -> ProfileConfig:
    """Validate values and build the profile model."""
    try:
        if config_values["provider"] == "vsphere":
            auth = AuthConfig(
                type="basic",
                user=config_values["user"],
                password=config_values["password"],
            )
        else:
            auth = AuthConfig(
                type="client_secret",
                client_id=config_values["client_id"],
                client_secret=config_values["client_secret"],
                tenant_id=config_values["tenant_id"],
            )
        return ProfileConfig(
            provider=config_values["provider"],
            host=config_values["host"],
            subscription_id=config_values["subscription_id"],
            verify_ssl=verify_ssl,
            timeout=timeout,
            auth=auth,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        print_error(f"Invalid profile: {messages}")
        raise typer.Exit(1)


def _render_profile_panel(name: str, profile: ProfileConfig, is_default: bool = False) -> Panel:
    """Build a Rich Panel for a profile."""
    lines = [f"[bold]Provider:[/bold]     {profile.provider}"]
    if profile.provider == "vsphere":
        lines.append(f"[bold]Host:[/bold]         {profile.host}")
        lines.append(f"[bold]User:[/bold]         {profile.auth.user}")
        lines.append(f"[bold]SSL:[/bold]          {'Yes' if profile.verify_ssl else 'No'}")
    else:
        lines.append(f"[bold]Subscription:[/bold] {profile.subscription_id}")
        lines.append(f"[bold]Tenant:[/bold]       {profile.auth.tenant_id}")
        lines.append(f"[bold]Client ID:[/bold]    {profile.auth.client_id}")
    lines.append(f"[bold]Auth:[/bold]         {profile.auth.type}")
    lines.append(f"[bold]Timeout:[/bold]      {profile.timeout}s")

    if is_default:
        lines.append("")
        lines.append("[green]Default profile[/green]")

    return Panel("\n".join(lines), title=f"Profile: {name}", border_style="blue")


# ── config add ───────────────────────────────────────────────────────────


@app.command("add")
def add_profile(
    name: str = typer.Argument(None, help="Profile name"),
    provider: str = typer.Option(None, "--provider", "-P", help="Provider: vsphere or azure"),
    host: str = typer.Option(None, "--host", "-H", help="vCenter host (IP or hostname)"),
    user: str = typer.Option(None, "--user", "-u", help="vCenter username"),
    password: str = typer.Option(None, "--password", help="vCenter password"),
    subscription_id: str = typer.Option(None, "--subscription", "-s", help="Azure subscription ID"),
    tenant_id: str = typer.Option(None, "--tenant", help="Azure tenant ID"),
    client_id: str = typer.Option(None, "--client-id", help="Azure application (client) ID"),
    client_secret: str = typer.Option(None, "--client-secret", help="Azure client secret"),
    insecure: bool = typer.Option(
        False, "--insecure", "-k", is_flag=True, help="Skip TLS certificate verification"
    ),
    timeout: int = typer.Option(30, "--timeout", "-t", help="Request timeout in seconds"),
    make_default: bool = typer.Option(
        False, "--default", is_flag=True, help="Set as the default profile"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Save without asking"),
) -> None:
    """Add a new profile."""
    config_manager = ConfigManager()

    try:
        config_values = {
            "provider": provider.lower() if provider else None,
            "host": host,
            "user": user,
            "password": password,
            "subscription_id": subscription_id,
            "tenant_id": tenant_id,
            "client_id": client_id,
            "client_secret": client_secret,
        }
        verify_ssl = not insecure

        if config_values["provider"] not in (None, *PROVIDERS):
            print_error(f"Unknown provider '{provider}'. Use vsphere or azure.")
            raise typer.Exit(1)

        if name is None:
            name = prompt("Profile name", default="default")
        _check_profile_exists(config_manager, name)

        if _needs_interactive(config_values):
            config_values, verify_ssl = _collect_profile_values(config_values, verify_ssl)

        profile = _create_profile(config_values, verify_ssl, timeout)
        if profile.provider == "vsphere" and not profile.verify_ssl:
            print_warning("TLS certificate verification is disabled for this profile")

        console.print()
        console.print(_render_profile_panel(name, profile))

        if not yes and not confirm("\nSave this profile?", default=True):
            print_cancelled()
            raise typer.Exit()

        is_first = not config_manager.exists() or not config_manager.get().profiles

        config_manager.add_profile(name, profile)

        if is_first:
            print_success(f"Profile '{name}' added (set as default)")
        elif make_default or (not yes and confirm("Set as default profile?", default=False)):
            config_manager.set_default_profile(name)
            print_success(f"Profile '{name}' added (set as default)")
        else:
            print_success(f"Profile '{name}' added")

    except KeyboardInterrupt:
        console.print()
        print_cancelled()
    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config remove ────────────────────────────────────────────────────────


@app.command("remove")
def remove_profile(
    name: str = typer.Argument(None, help="Profile name"),
    all_profiles: bool = typer.Option(False, "--all", "-a", is_flag=True, help="Remove all profiles"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Remove without asking"),
) -> None:
    """Remove a profile or all profiles."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()

        if all_profiles:
            if not config.profiles:
                print_info("No profiles to remove")
                return
            selected = list(config.profiles.keys())
        elif name:
            selected = [name]
        else:
            if not config.profiles:
                print_info("No profiles configured. Run 'cloudinv config add' to create one.")
                return
            selected = multi_select_menu(
                sorted(config.profiles.keys()),
                "  Profiles to remove (Space to toggle, Enter to confirm):",
            )
            if not selected:
                print_cancelled()
                return

        label = "ALL profiles" if all_profiles else ", ".join(f"'{n}'" for n in selected)
        if not yes and not confirm(f"Remove {label}?", default=False):
            print_cancelled()
            return

        for n in selected:
            config_manager.remove_profile(n)

        if len(selected) == 1:
            print_success(f"Profile '{selected[0]}' removed")
        else:
            print_success(f"{len(selected)} profiles removed: {', '.join(selected)}")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config default ───────────────────────────────────────────────────────


@app.command("default")
def set_default(
    name: str = typer.Argument(None, help="Profile name"),
) -> None:
    """Set the default profile."""
    config_manager = ConfigManager()

    try:
        if not name:
            name = _pick_profile(config_manager)
            if name is None:
                return

        config_manager.set_default_profile(name)
        print_success(f"Default profile set to '{name}'")

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config list ──────────────────────────────────────────────────────────


@app.command("list")
def list_profiles() -> None:
    """List all profiles."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()
        if not config.profiles:
            print_info("No profiles configured. Run 'cloudinv config add' to create one.")
            return

        table = Table(title="Configured Profiles", show_header=True, header_style="bold cyan")
        table.add_column("Profile", style="cyan")
        table.add_column("Provider")
        table.add_column("Target")
        table.add_column("Auth Type")
        table.add_column("Default", style="green")

        for profile_name, profile in config.profiles.items():
            is_default = "✓" if profile_name == config.default_profile else ""
            table.add_row(
                profile_name,
                profile.provider,
                profile.target,
                profile.auth.type,
                is_default,
            )

        console.print(table)

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config show ──────────────────────────────────────────────────────────


@app.command("show")
def show_profile(
    name: str = typer.Argument(None, help="Profile name"),
    all_profiles: bool = typer.Option(False, "--all", "-a", is_flag=True, help="Show all profiles"),
) -> None:
    """Show profile details."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()

        if all_profiles:
            if not config.profiles:
                print_info("No profiles configured")
                return
            for pname in sorted(config.profiles):
                profile = config.profiles[pname]
                is_default = pname == config.default_profile
                console.print(_render_profile_panel(pname, profile, is_default))
        else:
            if not name:
                name = _pick_profile(config_manager)
                if name is None:
                    return

            profile = config_manager.get_profile(name)
            is_default = name == config.default_profile
            console.print(_render_profile_panel(name, profile, is_default))

    except CloudInvError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config test ──────────────────────────────────────────────────────────


@app.command("test")
@async_to_sync
async def test_profile(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to test"),
) -> None:
    """Authenticate with a profile and run one read-only listing."""
    config_manager = ConfigManager()

    try:
        profile_config = config_manager.get_profile(profile)
        profile_name = profile or config_manager.get().default_profile

        print_info(f"Testing connection to {profile_config.target}...")

        if profile_config.provider == "vsphere":
            async with VSphereClient.from_profile(profile_config) as client:
                await client.authenticate()
                datacenters = await client.get_datacenters()
                await client.logout()
            print_success(f"Connection successful to '{profile_name}'")
            print_info(f"Datacenters visible: {len(datacenters)}")
        else:
            async with AzureClient.from_profile(profile_config) as client:
                await client.authenticate(
                    profile_config.auth.client_id or "",
                    profile_config.auth.client_secret or "",
                    profile_config.auth.tenant_id or "",
                )
                locations = await client.get_locations()
            print_success(f"Connection successful to '{profile_name}'")
            print_info(f"Locations visible: {len(locations)}")

    except CloudInvError as e:
        print_error(f"Connection failed: {e}")
        raise typer.Exit(1)
