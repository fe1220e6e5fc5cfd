"""Cursor navigation shared by the select, multi-select and reorder prompts."""

from __future__ import annotations

import enum

from pi.inquire.keys import Key, KeyKind, KeyModifiers


class ListAction(enum.Enum):
    MOVE_UP = "moveUp"
    MOVE_DOWN = "moveDown"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    MOVE_TO_START = "moveToStart"
    MOVE_TO_END = "moveToEnd"


def list_action_from_key(key: Key, vim_mode: bool) -> ListAction | None:
    """Map arrows, paging keys and (in vim mode) ``k``/``j``."""
    if vim_mode:
        if key.is_char("k"):
            return ListAction.MOVE_UP
        if key.is_char("j"):
            return ListAction.MOVE_DOWN

    plain = key.modifiers == KeyModifiers.NONE
    if key.kind is KeyKind.UP and plain:
        return ListAction.MOVE_UP
    if key.kind is KeyKind.DOWN and plain:
        return ListAction.MOVE_DOWN
    if key.kind is KeyKind.PAGE_UP:
        return ListAction.PAGE_UP
    if key.kind is KeyKind.PAGE_DOWN:
        return ListAction.PAGE_DOWN
    if key.kind is KeyKind.HOME:
        return ListAction.MOVE_TO_START
    if key.kind is KeyKind.END:
        return ListAction.MOVE_TO_END
    return None


def cursor_up(cursor: int, qty: int, length: int, wrap: bool) -> int:
    if cursor >= qty:
        return cursor - qty
    if wrap:
        return max(length - (qty - cursor), 0)
    return 0


def cursor_down(cursor: int, qty: int, length: int, wrap: bool) -> int:
    if length == 0:
        return 0
    position = cursor + qty
    if position < length:
        return position
    if wrap:
        return position % length
    return length - 1


def navigate(action: ListAction, cursor: int, length: int, page_size: int) -> int:
    """New cursor position after *action*; single steps wrap, pages saturate."""
    if action is ListAction.MOVE_UP:
        return cursor_up(cursor, 1, length, wrap=True)
    if action is ListAction.MOVE_DOWN:
        return cursor_down(cursor, 1, length, wrap=True)
    if action is ListAction.PAGE_UP:
        return cursor_up(cursor, page_size, length, wrap=False)
    if action is ListAction.PAGE_DOWN:
        return cursor_down(cursor, page_size, length, wrap=False)
    if action is ListAction.MOVE_TO_START:
        return 0
    return max(length - 1, 0)
