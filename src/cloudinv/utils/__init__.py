"""Utility functions and helpers."""

from .helpers import (
    async_to_sync,
    ordered_group,
    parse_enum_csv,
    setup_logging,
    split_csv,
)
from .menu import (
    multi_select_menu,
    select_menu,
    select_value,
)
from .output import (
    OUTPUT_FORMATS,
    colored_status,
    confirm,
    console,
    create_table,
    format_bytes,
    format_percentage,
    get_status_color,
    print_cancelled,
    print_error,
    print_info,
    print_records,
    print_success,
    print_warning,
    prompt,
)

__all__ = [
    "OUTPUT_FORMATS",
    "async_to_sync",
    "colored_status",
    "confirm",
    "console",
    "create_table",
    "format_bytes",
    "format_percentage",
    "get_status_color",
    "multi_select_menu",
    "ordered_group",
    "parse_enum_csv",
    "print_cancelled",
    "print_error",
    "print_info",
    "print_records",
    "print_success",
    "print_warning",
    "prompt",
    "select_menu",
    "select_value",
    "setup_logging",
    "split_csv",
]
