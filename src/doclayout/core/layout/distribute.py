"""Spatial distribution: map elements and a container rectangle to placement rectangles.

Every strategy is a pure function of (elements, container, strategy, shape, gap).
Units are whatever the container uses; the pipeline works in inches.
"""

import math
from typing import Sequence

from doclayout.core.models import LayoutElement, Placement, Rect


PHI = 1.618
STRATEGIES = ("even", "golden", "grid", "thirds", "masonry", "custom")
DEFAULT_GAP = 0.2
MASONRY_COLUMNS = 3
MASONRY_DEFAULT_HEIGHT = 2.0


def golden_split(container: Rect) -> tuple[Rect, Rect]:
    """Split a container into (main, sidebar) by the golden ratio along its width."""
    main_width = container.width / PHI
    main = Rect(x=container.x, y=container.y, width=main_width, height=container.height)
    sidebar = Rect(
        x=container.x + main_width, y=container.y,
        width=container.width - main_width, height=container.height,
    )
    return main, sidebar


def grid_cells(container: Rect, rows: int, cols: int, gap: float = DEFAULT_GAP) -> list[list[Rect]]:
    """Row-major rows x cols cells separated by a fixed gap."""
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid needs at least one row and column, got {rows}x{cols}")
    cell_w = (container.width - (cols - 1) * gap) / cols
    cell_h = (container.height - (rows - 1) * gap) / rows
    return [
        [
            Rect(x=container.x + c * (cell_w + gap), y=container.y + r * (cell_h + gap), width=cell_w, height=cell_h)
            for c in range(cols)
        ]
        for r in range(rows)
    ]


def _golden(elements, container, gap):
    if len(elements) > 2:
        raise ValueError(f"golden distribution places at most 2 elements, got {len(elements)}")
    main, sidebar = golden_split(container)
    return [(el, main if i == 0 else sidebar) for i, el in enumerate(elements)]


def _grid(elements, container, gap, rows=None, cols=None):
    n = len(elements)
    cols = cols or (math.ceil(n / rows) if rows else math.ceil(math.sqrt(n)))
    rows = rows or math.ceil(n / cols)
    if n > rows * cols:
        raise ValueError(f"{n} elements do not fit a {rows}x{cols} grid")
    cells = grid_cells(container, rows, cols, gap)
    return [(el, cells[i // cols][i % cols]) for i, el in enumerate(elements)]


def _thirds(elements, container, gap):
    third_w = container.width / 3
    row_h = container.height / math.ceil(len(elements) / 3)
    return [
        (el, Rect(
            x=container.x + (i % 3) * third_w,
            y=container.y + (i // 3) * row_h,
            width=third_w - gap,
            height=row_h - gap,
        ))
        for i, el in enumerate(elements)
    ]


def _masonry(elements, container, gap):
    col_w = container.width / MASONRY_COLUMNS
    heights = [container.y] * MASONRY_COLUMNS
    placed = []
    for el in elements:
        col = heights.index(min(heights))   # shortest column, leftmost on ties
        h = el.preferred_height or MASONRY_DEFAULT_HEIGHT
        placed.append((el, Rect(x=container.x + col * col_w, y=heights[col], width=col_w - gap, height=h)))
        heights[col] += h + gap
    return placed


def _even(elements, container, gap):
    per_row = math.ceil(math.sqrt(len(elements)))
    item_w = container.width / per_row
    item_h = container.height / math.ceil(len(elements) / per_row)
    return [
        (el, Rect(
            x=container.x + (i % per_row) * item_w,
            y=container.y + (i // per_row) * item_h,
            width=item_w - gap,
            height=item_h - gap,
        ))
        for i, el in enumerate(elements)
    ]


def distribute(
    elements: Sequence[LayoutElement],
    container: Rect,
    strategy: str = "even",
    rows: int | None = None,
    cols: int | None = None,
    gap: float = DEFAULT_GAP,
    ) -> list[Placement]:
    """Place elements inside container using the named strategy ('custom' behaves as 'even')."""
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown distribution strategy: {strategy!r}")
    if not elements:
        return []

    if strategy == "golden":
        placed = _golden(elements, container, gap)
    elif strategy == "grid":
        placed = _grid(elements, container, gap, rows, cols)
    elif strategy == "thirds":
        placed = _thirds(elements, container, gap)
    elif strategy == "masonry":
        placed = _masonry(elements, container, gap)
    else:
        placed = _even(elements, container, gap)
    return [Placement(element_id=el.id, rect=rect) for el, rect in placed]
