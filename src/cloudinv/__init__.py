"""cloudinv - read-only inventory of vCenter and Azure compute metadata."""

__version__ = "0.1.0"
