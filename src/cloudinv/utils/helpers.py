"""Helper utilities."""

import asyncio
import logging
import re
from enum import Enum
from functools import wraps
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from typer.core import TyperGroup

E = TypeVar("E", bound=Enum)

# Commas not preceded by a backslash
_CSV_SEPARATOR = re.compile(r"(?<!\\),")


def async_to_sync(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to run async functions synchronously."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(func(*args, **kwargs))

    return wrapper


def ordered_group(order: list[str]) -> type[TyperGroup]:
    """Create a TyperGroup subclass that orders commands."""

    class _OrderedGroup(TyperGroup):
        def list_commands(self, ctx: Any) -> list[str]:
            commands = super().list_commands(ctx)
            rank = {n: i for i, n in enumerate(order)}
            return sorted(commands, key=lambda n: rank.get(n, 99))

    return _OrderedGroup


def split_csv(raw: str | None) -> list[str] | None:
    """Split a comma-separated option value.

    A backslash keeps a comma inside an item: ``"a\\,b,c"`` gives
    ``["a,b", "c"]``.

    Args:
        raw: Option value (e.g. "vm-1,vm-2"), or None when not given

    Returns:
        Non-empty stripped items, or None when nothing was given
    """
    if raw is None:
        return None
    parts = (part.replace("\\,", ",").strip() for part in _CSV_SEPARATOR.split(raw))
    items = [part for part in parts if part]
    return items or None


def parse_enum_csv(raw: str | None, enum_cls: type[E], option: str) -> list[E] | None:
    """Split a comma-separated option value into enum members.

    Args:
        raw: Option value (e.g. "POWERED_ON,SUSPENDED")
        enum_cls: Enum to convert to
        option: Option name for error messages

    Returns:
        Enum members, or None when nothing was given

    Raises:
        typer.BadParameter: If a value is not a member of the enum
    """
    items = split_csv(raw)
    if items is None:
        return None
    try:
        return [enum_cls(item.upper()) for item in items]
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise typer.BadParameter(f"expected one of: {allowed}", param_hint=option)


def setup_logging(verbose: bool = False) -> None:
    """Route log records through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=verbose)
        ],
        force=True,
    )
    # azure-identity and httpcore dump full request traces at DEBUG
    for name in ("azure", "httpcore"):
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)
