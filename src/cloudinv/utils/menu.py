"""Interactive terminal menus for profile selection."""

from simple_term_menu import TerminalMenu

_CURSOR = "> "
_CURSOR_STYLE = ("fg_cyan", "bold")


def select_menu(items: list[str], title: str) -> int | None:
    """Show a single-select menu. Returns selected index or None if cancelled."""
    menu = TerminalMenu(
        items,
        title=title,
        menu_cursor=_CURSOR,
        menu_cursor_style=_CURSOR_STYLE,
    )
    return menu.show()


def select_value(items: list[str], title: str) -> str | None:
    """Show a single-select menu. Returns the chosen item or None if cancelled."""
    idx = select_menu(items, title)
    return None if idx is None else items[idx]


def multi_select_menu(items: list[str], title: str) -> list[str] | None:
    """Show a multi-select menu. Returns the chosen items or None if cancelled."""
    menu = TerminalMenu(
        items,
        title=title,
        multi_select=True,
        show_multi_select_hint=True,
        show_multi_select_hint_text="Space: toggle | Enter: confirm | Escape: cancel",
        multi_select_select_on_accept=False,
        menu_cursor=_CURSOR,
        menu_cursor_style=_CURSOR_STYLE,
    )
    sel = menu.show()
    if sel is None:
        return None
    indices = list(sel) if isinstance(sel, tuple) else [sel]
    return [items[i] for i in indices]
