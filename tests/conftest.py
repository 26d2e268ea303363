"""Pytest fixtures for skai-prompts tests."""

import pytest
from rich.text import Text

from skai_prompts.types import Item, ManagedEntry, Option


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback the way an elapsed timer thread would."""
        self.function(*self.args, **self.kwargs)


@pytest.fixture
def timers():
    """Timer factory recording every FakeTimer it creates."""

    class Factory:
        def __init__(self):
            self.created = []

        def __call__(self, *args, **kwargs):
            timer = FakeTimer(*args, **kwargs)
            self.created.append(timer)
            return timer

        @property
        def last(self):
            return self.created[-1]

    return Factory()


@pytest.fixture
def plain():
    """Strip Rich markup from a rendered frame."""

    def _plain(frame) -> str:
        if isinstance(frame, list):
            frame = "\n".join(frame)
        return Text.from_markup(frame).plain

    return _plain


def leaf(item_id: str, label: str | None = None, hint: str | None = None, **extra) -> Item:
    return Item.leaf(item_id, label or item_id, payload={"id": item_id, **extra}, hint=hint)


@pytest.fixture
def make_leaf():
    return leaf


@pytest.fixture
def catalog():
    """Two groups: A holds x and y, B holds z."""
    return [
        Item.group("a", "A", [leaf("x"), leaf("y")]),
        Item.group("b", "B", [leaf("z")]),
    ]


@pytest.fixture
def catalog_groups():
    """The same catalog as grouped options."""
    return {
        "A": [Option(value="x", label="x"), Option(value="y", label="y")],
        "B": [Option(value="z", label="z")],
    }


@pytest.fixture
def numbered_options():
    """Twelve flat options: item-00 .. item-11."""
    return [Option(value=i, label=f"item-{i:02d}") for i in range(12)]


@pytest.fixture
def managed():
    return [
        ManagedEntry(key="claude:foo", name="foo", original_enabled=True, columns=("Claude", "global"), category="Claude"),
        ManagedEntry(key="claude:bar", name="bar", original_enabled=False, columns=("Claude", "project"), category="Claude"),
        ManagedEntry(key="codex:baz", name="baz", original_enabled=True, columns=("Codex", "global"), category="Codex"),
    ]
