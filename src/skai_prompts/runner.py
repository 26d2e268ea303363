"""Live render loop driving a prompt from raw key presses."""

from __future__ import annotations

import logging
import threading
from typing import Any

import readchar
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .prompts.base import BasePrompt

logger = logging.getLogger(__name__)

default_console = Console(highlight=False)


def run_prompt(prompt: BasePrompt, console: Console | None = None) -> Any:
    """Run ``prompt`` until it submits or cancels and return its result.

    Redraws after every key. KeyboardInterrupt and EOF from the key reader
    cancel the prompt. The prompt is always closed on exit, including when an
    exception propagates, so no flash timer outlives it.

    Returns:
        The prompt's value on submit, or ``CANCEL``.
    """
    target = console or default_console
    lock = threading.Lock()

    with Live("", console=target, refresh_per_second=15, transient=True) as live:

        def redraw() -> None:
            with lock:
                live.update(Text.from_markup(prompt.render()))

        prompt.attach(redraw)
        try:
            redraw()
            while prompt.is_active:
                try:
                    key = readchar.readkey()
                except (KeyboardInterrupt, EOFError):
                    logger.debug("Input interrupted, cancelling %s", prompt.__class__.__name__)
                    prompt.cancel()
                    break
                prompt.handle_key(key)
                redraw()
        finally:
            prompt.close()

    # Leave the closed summary on screen once the transient frame is gone
    target.print(Text.from_markup(prompt.render()))
    return prompt.result()
