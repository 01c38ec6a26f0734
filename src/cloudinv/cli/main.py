"""Main CLI application."""

import typer
from rich.console import Console

from .. import __version__
from ..utils.helpers import setup_logging
from . import azure, config, vsphere

console = Console()

app = typer.Typer(
    name="cloudinv",
    help="Read-only inventory for vCenter and Azure",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(config.app, name="config")
app.add_typer(vsphere.app, name="vsphere")
app.add_typer(azure.app, name="azure")


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether version flag was set
    """
    if value:
        console.print(f"cloudinv version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", is_flag=True, help="Log requests to stderr"
    ),
) -> None:
    """cloudinv - inventory for vCenter and Azure.

    List virtual machines, hosts, datastores and networks from a vCenter
    server, and locations, SKUs and VM sizes from an Azure subscription.

    Get started:
        cloudinv config add         # Set up your first profile
        cloudinv vsphere vms        # List vCenter VMs
        cloudinv azure skus -l westus2
    """
    setup_logging(verbose)


if __name__ == "__main__":
    app()
