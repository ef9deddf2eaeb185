"""
Navigation State

Where the user is (catalog or a repository), what is listed, which row is
focused, and what the status line says.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple


# A status line fragment: (text, rich style string)
Fragment = Tuple[str, str]


class Location(ABC):
    """Base class for the place in the registry hierarchy"""

    @abstractmethod
    def label(self) -> str:
        """Name shown as the list pane title"""


@dataclass(frozen=True)
class Unknown(Location):
    """Initial location before the first successful fetch"""

    def label(self) -> str:
        return "Unknown"


@dataclass(frozen=True)
class Catalog(Location):
    """Root listing of repositories"""

    def label(self) -> str:
        return "Catalog"


@dataclass(frozen=True)
class Image(Location):
    """Tag listing for one repository"""
    name: str

    def label(self) -> str:
        return self.name


class Mode(Enum):
    NORMAL = "normal"
    SEARCH = "search"


class StatusTitle(Enum):
    TIPS = "Tips"
    SEARCH = "Search"


TIPS: List[List[Fragment]] = [
    [("Press ", ""), ("q", "bold"), (" to exit.", "")],
    [("Press ", ""), ("/", "bold"), (" to filter the list with a regular expression.", "")],
    [("Press ", ""), ("Esc", "bold"), (" to go back to the full catalog.", "")],
]

BOTTOM_MESSAGE = "You reached bottom of the result"
TOP_MESSAGE = "You reached top of the result"


def pick_tip(pool: Sequence[List[Fragment]], rng: Optional[random.Random] = None) -> List[Fragment]:
    """Pick one tip uniformly at random from the pool"""
    if not pool:
        return []
    rng = rng or random.Random()
    return list(pool[rng.randrange(len(pool))])


@dataclass
class NavigationState:
    """Everything the renderer needs to paint one frame"""
    location: Location = field(default_factory=Unknown)
    items: List[str] = field(default_factory=list)
    focus: int = 0
    mode: Mode = Mode.NORMAL
    input: str = ""
    status_title: StatusTitle = StatusTitle.TIPS
    status_body: List[Fragment] = field(default_factory=list)

    def focused_item(self) -> Optional[str]:
        """Item under the cursor, None when the list is empty"""
        if not self.items:
            return None
        return self.items[self.focus]

    def replace_items(self, items: List[str]) -> None:
        """Swap in a new list and put the cursor on the first row"""
        self.items = list(items)
        self.focus = 0

    def set_message(self, text: str, style: str = "") -> None:
        self.status_body = [(text, style)]

    def enter_search(self) -> None:
        self.mode = Mode.SEARCH
        self.status_title = StatusTitle.SEARCH
        self.input = ""
        self.mirror_input()

    def leave_search(self) -> None:
        self.mode = Mode.NORMAL
        self.status_title = StatusTitle.TIPS
        self.input = ""

    def mirror_input(self) -> None:
        """Echo the search text into the status line"""
        self.status_body = [(self.input, "")]
