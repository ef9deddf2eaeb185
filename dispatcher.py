"""
Input Dispatcher

Maps key presses to transitions of the NavigationState. Registry fetches
happen inline: the caller blocks until they return.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from debug_log import DebugLogger, null_logger
from navigation import (
    BOTTOM_MESSAGE, TIPS, TOP_MESSAGE, Catalog, Fragment, Image, Location, Mode,
    NavigationState, Unknown, pick_tip,
)
from registry_client import RegistryError
from search import PatternError, compile_pattern, filter_items


@dataclass(frozen=True)
class KeyPress:
    """Toolkit independent key event"""
    key: str
    character: Optional[str] = None

    @classmethod
    def of(cls, character: str) -> "KeyPress":
        """Key press for a printable character"""
        return cls(key=character, character=character)

    @property
    def is_printable(self) -> bool:
        return bool(self.character) and self.character.isprintable()


NORMAL_BINDINGS = {
    "q": "quit",
    "escape": "back",
    "j": "move_down",
    "down": "move_down",
    "k": "move_up",
    "up": "move_up",
    "G": "jump_last",
    "enter": "select",
    "/": "enter_search",
    "slash": "enter_search",
    "f5": "refresh",
}


class InputDispatcher:
    """Owns the transition rules; the state itself is passed in on every call"""

    def __init__(self, client, tips: Sequence[List[Fragment]] = TIPS,
                 rng: random.Random = None, debug_logger: DebugLogger = None):
        self.client = client
        self.tips = tips
        self.rng = rng or random.Random()
        self.debug_logger = debug_logger or null_logger

    # Registry access

    def _fetch(self, location: Location) -> List[str]:
        if isinstance(location, Image):
            return self.client.fetch_tags(location.name)
        return self.client.fetch_catalog()

    def _load(self, state: NavigationState, location: Location) -> bool:
        """Fetch the full list for location; on failure keep the prior state"""
        self.debug_logger.info("Fetching", location=location.label())
        try:
            items = self._fetch(location)
        except RegistryError as e:
            self.debug_logger.error("Fetch failed", location=location.label(), error=str(e))
            self._report_error(state, e)
            return False

        state.location = location
        state.replace_items(items)
        state.status_body = pick_tip(self.tips, self.rng)
        self.debug_logger.debug("Fetched", location=location.label(), count=len(items))
        return True

    def _report_error(self, state: NavigationState, error: Exception) -> None:
        state.status_body = [("Error: ", "bold red"), (str(error), "")]

    def start(self, state: NavigationState) -> bool:
        """Initial catalog fetch"""
        return self._load(state, Catalog())

    # Event entry point

    def dispatch(self, state: NavigationState, key: KeyPress) -> bool:
        """Apply one key press. Returns False when the program should exit."""
        if state.mode is Mode.SEARCH:
            self._dispatch_search(state, key)
            return True

        action = None
        if key.is_printable:
            action = NORMAL_BINDINGS.get(key.character)
        if action is None:
            action = NORMAL_BINDINGS.get(key.key)
        if action is None:
            return True
        if action == "quit":
            self.debug_logger.info("Quit requested")
            return False

        getattr(self, action)(state)
        return True

    def _dispatch_search(self, state: NavigationState, key: KeyPress) -> None:
        if key.key == "enter":
            self.commit_search(state)
        elif key.key == "escape":
            self.cancel_search(state)
        elif key.key == "backspace":
            self.edit_backspace(state)
        elif key.is_printable:
            self.edit_char(state, key.character)

    # Normal mode

    def back(self, state: NavigationState) -> None:
        """Escape: reload the full catalog, from the catalog or a repository"""
        if isinstance(state.location, Unknown):
            return
        self._load(state, Catalog())

    def refresh(self, state: NavigationState) -> None:
        """Reload the unfiltered list for where we are, or retry the startup fetch"""
        if isinstance(state.location, Unknown):
            self._load(state, Catalog())
        else:
            self._load(state, state.location)

    def move_down(self, state: NavigationState) -> None:
        if state.focus < len(state.items) - 1:
            state.focus += 1
        else:
            state.set_message(BOTTOM_MESSAGE)

    def move_up(self, state: NavigationState) -> None:
        if state.focus > 0:
            state.focus -= 1
        else:
            state.set_message(TOP_MESSAGE)

    def jump_last(self, state: NavigationState) -> None:
        # Empty list: focus stays at 0, never -1
        if state.items:
            state.focus = len(state.items) - 1

    def select(self, state: NavigationState) -> None:
        """Enter on a catalog row opens that repository's tags"""
        if not isinstance(state.location, Catalog):
            return
        name = state.focused_item()
        if name is None:
            return
        self._load(state, Image(name))

    def enter_search(self, state: NavigationState) -> None:
        state.enter_search()

    # Search mode

    def commit_search(self, state: NavigationState) -> None:
        """Narrow the displayed list to entries matching the input"""
        try:
            pattern = compile_pattern(state.input)
        except PatternError as e:
            self.debug_logger.info("Invalid search pattern", pattern=state.input, error=e.reason)
            state.status_body = [(state.input, ""), (f"  {e.reason}", "bold red")]
            return

        state.replace_items(filter_items(state.items, pattern))
        self.debug_logger.debug("Search committed", pattern=state.input, matches=len(state.items))
        state.leave_search()
        state.status_body = pick_tip(self.tips, self.rng)

    def cancel_search(self, state: NavigationState) -> None:
        """Drop the search text and restore the unfiltered list"""
        state.leave_search()
        state.status_body = pick_tip(self.tips, self.rng)
        if not isinstance(state.location, Unknown):
            self._load(state, state.location)

    def edit_backspace(self, state: NavigationState) -> None:
        if state.input:
            state.input = state.input[:-1]
        state.mirror_input()

    def edit_char(self, state: NavigationState, character: str) -> None:
        state.input += character
        state.mirror_input()
