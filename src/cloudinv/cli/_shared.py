"""Helpers shared by the command modules."""

import typer

from ..api.azure import AzureClient
from ..api.exceptions import ConfigError
from ..config import ConfigManager, ProfileConfig
from ..utils import OUTPUT_FORMATS


def get_profile(config_manager: ConfigManager, name: str | None, provider: str) -> ProfileConfig:
    """Load a profile and check it targets *provider*.

    Args:
        config_manager: Configuration manager
        name: Profile name (default profile if None)
        provider: Expected provider, ``vsphere`` or ``azure``

    Returns:
        Profile configuration

    Raises:
        ConfigError: If the profile is missing or for another provider
    """
    profile = config_manager.get_profile(name)
    if profile.provider != provider:
        label = name or config_manager.get().default_profile
        raise ConfigError(
            f"Profile '{label}' targets {profile.provider}, not {provider}. "
            "Use --profile to pick another one."
        )
    return profile


def output_format(config_manager: ConfigManager, output: str | None) -> str:
    """Resolve the output format from the option or the stored preference.

    Args:
        config_manager: Configuration manager
        output: Value of --output, if given

    Returns:
        One of table, json, yaml

    Raises:
        typer.BadParameter: If the format is unknown
    """
    if output is None:
        return config_manager.get().output.format
    if output not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"expected one of: {', '.join(OUTPUT_FORMATS)}", param_hint="--output"
        )
    return output


async def connect_azure(profile: ProfileConfig) -> AzureClient:
    """Create an Azure client and authenticate it with the profile's service principal.

    Args:
        profile: Azure profile configuration

    Returns:
        Authenticated client (caller closes it)
    """
    client = AzureClient.from_profile(profile)
    await client.authenticate(
        profile.auth.client_id or "",
        profile.auth.client_secret or "",
        profile.auth.tenant_id or "",
    )
    return client


def yes_no(value: bool | None) -> str:
    """Render an optional flag."""
    if value is None:
        return "-"
    return "[green]Yes[/green]" if value else "[red]No[/red]"
