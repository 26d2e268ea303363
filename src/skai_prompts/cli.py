"""skai-pick: run a selection prompt over a catalog file.

Prints the ids picked (or the net enable/disable changes with --manage).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from rich.console import Console

from . import __version__
from .config import load_config
from .errors import CatalogError, SelectionCancelled
from .items import categorize, iter_leaves, load_catalog
from .select import (
    OTHER_GROUP,
    apply_changes,
    grouped_multiselect,
    manage_toggles,
    tree_browse,
    tree_select,
)
from .themes import available_themes
from .types import Item, ManagedEntry

logger = logging.getLogger(__name__)

console = Console(highlight=False)


def _entry_id(payload) -> str:
    if isinstance(payload, dict):
        return str(payload.get("id", ""))
    return str(payload)


def managed_entries(items: list[Item]) -> list[ManagedEntry]:
    """Build toggle-manager entries from catalog leaves.

    Leaves may carry ``enabled`` (default True) and ``columns``; the parent
    group's label becomes the category.
    """
    entries = []
    for leaf, parent in iter_leaves(items):
        payload = leaf.payload if isinstance(leaf.payload, dict) else {}
        entries.append(
            ManagedEntry(
                key=leaf.id,
                name=leaf.label,
                original_enabled=bool(payload.get("enabled", True)),
                columns=tuple(str(c) for c in payload.get("columns") or ()),
                category=parent.label if parent is not None else None,
                hint=leaf.hint,
                payload=leaf.payload,
            )
        )
    return entries


def cmd_pick(args, items: list[Item], config) -> None:
    if args.tree:
        picked = tree_browse(items, config=config, console=console)
    elif args.grouped:
        categorized = categorize(items)
        groups = dict(categorized.groups)
        if categorized.ungrouped:
            groups[OTHER_GROUP] = groups.get(OTHER_GROUP, []) + categorized.ungrouped
        picked = grouped_multiselect(groups, config=config, console=console)
    else:
        picked = tree_select(items, config=config, console=console)

    for payload in picked:
        print(_entry_id(payload))


def cmd_manage(args, items: list[Item], config) -> None:
    entries = managed_entries(items)
    result = manage_toggles(entries, config=config, console=console)
    if result is None:
        raise SelectionCancelled()

    entries, changes = result
    if not changes:
        console.print("[dim]No changes.[/dim]")
        return

    def report(entry: ManagedEntry, enabled: bool) -> None:
        print(f"{'enable' if enabled else 'disable'} {entry.key}")

    summary = apply_changes(entries, changes, report)
    logger.debug("%d enabled, %d disabled, %d failed", summary.enabled, summary.disabled, summary.failed)


def build_parser() -> argparse.ArgumentParser:
    """Build the skai-pick argument parser."""
    parser = argparse.ArgumentParser(
        prog="skai-pick",
        description="Interactively pick items from a YAML/JSON catalog",
    )
    parser.add_argument("--version", action="version", version=f"skai-prompts {__version__}")
    parser.add_argument("catalog", help="Catalog file (YAML or JSON)")
    parser.add_argument("--manage", action="store_true", help="Toggle enabled state instead of picking")
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument("--grouped", action="store_true", help="Grouped list with group header rows")
    layout.add_argument("--tree", action="store_true", help="Expandable tree")
    parser.add_argument("--max-visible", type=int, help="Rows shown before scrolling")
    parser.add_argument("--theme", choices=available_themes(), help="Color theme")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    """skai-pick entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        items = load_catalog(args.catalog)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not sys.stdin.isatty():
        print("Error: interactive selection requires a TTY.", file=sys.stderr)
        sys.exit(2)

    config = load_config()
    if args.max_visible is not None:
        if args.max_visible < 1:
            parser.error("--max-visible must be at least 1")
        config = replace(config, max_visible=args.max_visible)
    if args.theme:
        config = replace(config, theme=args.theme)

    try:
        if args.manage:
            cmd_manage(args, items, config)
        else:
            cmd_pick(args, items, config)
    except (SelectionCancelled, KeyboardInterrupt):
        print("Cancelled.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
