"""Keyboard input helpers for skai-prompts.

readchar returns raw strings (single characters or escape sequences). The
predicates here recognise them, and ``decode_key`` turns one raw key into a
``KeyEvent`` so prompts never deal with terminal sequences directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

import readchar

# Sequences readchar passes through untouched
PAGE_UP = "\x1b[5~"
PAGE_DOWN = "\x1b[6~"
SHIFT_TAB = "\x1b[Z"
CTRL_R = "\x12"
CTRL_C = "\x03"

SEARCH_CHAR_RE = re.compile(r"^[a-z0-9\-_./]$", re.IGNORECASE)


class Action(Enum):
    """Semantic action decoded from a raw key."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    NEXT_TAB = auto()
    PREV_TAB = auto()
    TOGGLE = auto()
    SUBMIT = auto()
    CANCEL = auto()
    ABORT = auto()
    BACKSPACE = auto()
    CLEAR_SEARCH = auto()
    CHAR = auto()
    NONE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key: the action plus the raw character for CHAR events."""

    action: Action
    char: str = ""


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_up(key: str) -> bool:
    return key == readchar.key.UP


def is_down(key: str) -> bool:
    return key == readchar.key.DOWN


def is_left(key: str) -> bool:
    return key == readchar.key.LEFT


def is_right(key: str) -> bool:
    return key == readchar.key.RIGHT


def is_page_up(key: str) -> bool:
    return key == PAGE_UP


def is_page_down(key: str) -> bool:
    return key == PAGE_DOWN


def is_tab(key: str) -> bool:
    return key == "\t"


def is_shift_tab(key: str) -> bool:
    return key == SHIFT_TAB


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_space(key: str) -> bool:
    return key == " "


def is_clear_search(key: str) -> bool:
    """Check if key is Ctrl+R (clear search)."""
    return key == CTRL_R


def is_interrupt(key: str) -> bool:
    return key == CTRL_C


def is_search_char(key: str) -> bool:
    """Check if key may be appended to a search term."""
    return bool(SEARCH_CHAR_RE.match(key))


def decode_key(key: str) -> KeyEvent:
    """Decode one raw key string into a KeyEvent."""
    if is_up(key):
        return KeyEvent(Action.UP)
    if is_down(key):
        return KeyEvent(Action.DOWN)
    if is_left(key):
        return KeyEvent(Action.LEFT)
    if is_right(key):
        return KeyEvent(Action.RIGHT)
    if is_page_up(key):
        return KeyEvent(Action.PAGE_UP)
    if is_page_down(key):
        return KeyEvent(Action.PAGE_DOWN)
    if is_shift_tab(key):
        return KeyEvent(Action.PREV_TAB)
    if is_tab(key):
        return KeyEvent(Action.NEXT_TAB)
    if is_space(key):
        return KeyEvent(Action.TOGGLE)
    if is_enter(key):
        return KeyEvent(Action.SUBMIT)
    if is_escape(key):
        return KeyEvent(Action.CANCEL)
    if is_interrupt(key):
        return KeyEvent(Action.ABORT)
    if is_backspace(key):
        return KeyEvent(Action.BACKSPACE)
    if is_clear_search(key):
        return KeyEvent(Action.CLEAR_SEARCH)
    if len(key) == 1 and key.isprintable():
        return KeyEvent(Action.CHAR, key)
    return KeyEvent(Action.NONE)
