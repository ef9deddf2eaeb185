#!/usr/bin/env python3
"""
Registry Browser TUI

Lists the repositories of a container registry, drills into a repository's
tags, and filters the current list with a regular expression.
"""

import argparse
import os
from typing import List, Mapping, Optional

from rich.markup import escape
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from debug_log import DEFAULT_LOG_FILE, DebugLogger
from dispatcher import InputDispatcher, KeyPress
from mock_data import MockRegistryClient
from navigation import NavigationState
from registry_client import RegistryClient
from viewport import VIEWPORT_ROWS, visible_rows


FOCUSED_STYLE = "black on white"


def render_status(state: NavigationState) -> Text:
    """Status line body: tip, boundary/error message or live search input"""
    text = Text(no_wrap=True, overflow="ellipsis")
    for fragment, style in state.status_body:
        text.append(fragment, style=style or None)
    return text


def render_rows(state: NavigationState, capacity: int = VIEWPORT_ROWS) -> Text:
    """Visible window of the item list with the focused row highlighted"""
    if not state.items:
        return Text("No items", style="dim")
    lines = []
    for _, item, focused in visible_rows(state.items, state.focus, capacity):
        lines.append(Text(item, style=FOCUSED_STYLE if focused else ""))
    return Text("\n").join(lines)


def list_title(state: NavigationState) -> str:
    return f"{escape(state.location.label())} ({len(state.items)})"


class RegistryBrowserApp(App):
    """Two-pane registry browser: status above, list below"""

    TITLE = "Registry Browser"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }

    #title {
        height: 1;
        margin: 0 2;
        text-style: bold;
    }

    #status {
        height: 1fr;
        border: solid $primary;
        margin: 0 1;
        padding: 0 1;
    }

    #items {
        height: 4fr;
        border: solid $secondary;
        margin: 0 1;
        padding: 0 1;
    }
    """

    def __init__(self, client, debug_logger: DebugLogger = None, capacity: int = VIEWPORT_ROWS, **kwargs):
        super().__init__(**kwargs)
        self.client = client
        self.debug_logger = debug_logger
        self.capacity = capacity
        self.state = NavigationState()
        self.dispatcher = InputDispatcher(client, debug_logger=debug_logger)

    def compose(self) -> ComposeResult:
        """Create the layout"""
        yield Static(self.TITLE, id="title")
        yield Static(id="status")
        yield Static(id="items")

    def on_mount(self) -> None:
        """Fetch the catalog before the first paint"""
        self.dispatcher.start(self.state)
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        """Every key goes through the dispatcher"""
        event.stop()
        event.prevent_default()
        keep_running = self.dispatcher.dispatch(self.state, KeyPress(event.key, event.character))
        if not keep_running:
            self.exit()
            return
        self.refresh_view()

    def refresh_view(self) -> None:
        """Repaint both panes from the navigation state"""
        status = self.query_one("#status", Static)
        status.border_title = self.state.status_title.value
        status.update(render_status(self.state))

        items = self.query_one("#items", Static)
        items.border_title = list_title(self.state)
        items.update(render_rows(self.state, self.capacity))


def parse_arguments(argv: Optional[List[str]] = None, environ: Mapping[str, str] = None) -> argparse.Namespace:
    """Parse command line arguments, falling back to ADDR and LOG_LEVEL"""
    environ = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(description="Registry Browser - TUI for browsing a container registry")

    parser.add_argument(
        "--addr",
        default=environ.get("ADDR", ""),
        help="Registry base URL, e.g. http://localhost:5000 (default: $ADDR)"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock registry data instead of a real registry"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=30,
        help="HTTP timeout in seconds (default: 30)"
    )

    parser.add_argument(
        "--log-level",
        default=environ.get("LOG_LEVEL", "WARNING"),
        help="Diagnostic log level (default: $LOG_LEVEL or WARNING)"
    )

    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"File for diagnostic logging (default: {DEFAULT_LOG_FILE})"
    )

    parser.add_argument(
        "--verbose-debug",
        action="store_true",
        help="Also log HTTP library internals (httpcore, httpx)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Registry Browser 0.1.0"
    )

    return parser.parse_args(argv)


def build_client(args: argparse.Namespace, debug_logger: DebugLogger):
    """Mock or HTTP client depending on --mock"""
    if args.mock:
        debug_logger.info("Using mock registry")
        return MockRegistryClient()
    if not args.addr:
        debug_logger.warning("ADDR is not set, fetches will fail until it is")
    return RegistryClient(args.addr, timeout=args.timeout, debug_logger=debug_logger)


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    args = parse_arguments(argv)

    debug_logger = DebugLogger(level=args.log_level, log_file=args.log_file, verbose=args.verbose_debug)
    debug_logger.info("Starting Registry Browser", addr=args.addr, mock=args.mock)

    client = build_client(args, debug_logger)
    try:
        RegistryBrowserApp(client, debug_logger=debug_logger).run()
    finally:
        client.close()
        debug_logger.close()


if __name__ == "__main__":
    main()
