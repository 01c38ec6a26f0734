"""CLI commands."""

from . import azure, config, main, vsphere

__all__ = ["azure", "config", "main", "vsphere"]
