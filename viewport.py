"""
List Viewport

Decides which slice of a long list is on screen. Pure: recomputed from
(items, focus, capacity) on every render.

The window starts at the focused row and stops at the last item, so the
focused row is always visible and the pane is never half empty when the
list is long enough to fill it.
"""

from typing import List, Sequence, Tuple


VIEWPORT_ROWS = 21


def visible_window(count: int, focus: int, capacity: int = VIEWPORT_ROWS) -> Tuple[int, int]:
    """Return inclusive (start, end) row indices of the visible window

    For an empty list the window is (0, -1), i.e. nothing to draw.
    """
    if count <= 0 or capacity <= 0:
        return 0, -1
    focus = min(max(focus, 0), count - 1)
    start = max(min(focus, count - capacity), 0)
    end = min(start + capacity, count) - 1
    return start, end


def visible_rows(items: Sequence[str], focus: int, capacity: int = VIEWPORT_ROWS) -> List[Tuple[int, str, bool]]:
    """Rows to draw as (index, text, is_focused)"""
    start, end = visible_window(len(items), focus, capacity)
    return [(index, items[index], index == focus) for index in range(start, end + 1)]
