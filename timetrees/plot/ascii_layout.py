"""
ASCII layout for time trees.

Each leaf gets one row of a character grid. A node's vertical position is its
leaf rank (for leaves) or the mean position of its children (for internal
nodes); its horizontal position is a linear map of its age onto the grid
columns. The grid is built with the present (age 0) in column 0 and the root
in the last column, then every row is reversed on output so the root ends up
on the left and the leaves on the right.

Rows and columns are obtained with Python's ``round``, which rounds halves to
the nearest even integer.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from timetrees.exceptions import DegenerateTreeError
from timetrees.logger import tt_logger
from timetrees.tree import Node, TimeTree

BLANK = " "
EDGE_HORIZONTAL = "-"
EDGE_VERTICAL = "|"
ELBOW_TOP = "/"
ELBOW_BOTTOM = "\\"
LEAF_MARKER = "*"
INTERNAL_MARKER = "+"
LEADER = "⋅"

DEFAULT_WIDTH = 70
MIN_WIDTH = 2

# (row, column) of a node in the grid
Cell = Tuple[int, int]


@dataclass
class PlotConfig:
    """Options for ASCII tree drawings."""

    width: int = DEFAULT_WIDTH
    label_leaves: bool = True
    dots: bool = True

    def validate(self) -> None:
        """
        Raises:
            ValueError: If the width leaves no room for both the root and the leaves.
        """
        if self.width < MIN_WIDTH:
            raise ValueError(
                f"Plot width must be at least {MIN_WIDTH} columns, got {self.width}"
            )


def compute_vertical_positions(tree: TimeTree) -> np.ndarray:
    """
    Compute the vertical position of every node.

    Leaves are placed at their 1-based rank; each internal node sits at the
    mean position of its children.

    Returns:
        Array of positions indexed by ``node.number - 1``.
    """
    pos = np.zeros(tree.n_nodes, dtype=float)

    for rank, leaf in enumerate(tree.get_leaves(), start=1):
        pos[leaf.number - 1] = rank

    # Internal nodes are numbered in pre-order, so walking them backwards
    # visits every child before its parent.
    for node in reversed(tree.get_internal_nodes()):
        pos[node.number - 1] = sum(pos[c.number - 1] for c in node.children) / len(
            node.children
        )

    return pos


def age_to_column(age: float, root_age: float, width: int) -> int:
    """
    Map an age in ``[0, root_age]`` onto a grid column in ``[0, width - 1]``.

    Column 0 is the present. Ages outside the range, which only occur with
    negative branch lengths, are clamped to the grid.

    Raises:
        DegenerateTreeError: If ``root_age`` is not positive.
    """
    if root_age <= 0:
        raise DegenerateTreeError(
            f"Cannot map ages onto columns for a tree of height {root_age}"
        )
    column = round(age / root_age * (width - 1))
    return min(max(column, 0), width - 1)


def position_to_row(position: float) -> int:
    return int(round(float(position))) - 1


def _node_cells(tree: TimeTree, width: int) -> List[Cell]:
    pos = compute_vertical_positions(tree)
    root_age = tree.root.age
    return [
        (position_to_row(pos[node.number - 1]), age_to_column(node.age, root_age, width))
        for node in tree.get_nodes()
    ]


def _draw_edge(grid: np.ndarray, child: Cell, parent: Cell) -> None:
    y1, x1 = child
    y2, x2 = parent

    grid[y1, min(x1, x2) : max(x1, x2) + 1] = EDGE_HORIZONTAL

    # Child on the parent's row: the horizontal run already reaches the parent
    if y1 == y2:
        return

    ymin, ymax = min(y1, y2), max(y1, y2)
    grid[ymin : ymax + 1, x2] = EDGE_VERTICAL
    grid[ymin, x2] = ELBOW_TOP
    grid[ymax, x2] = ELBOW_BOTTOM


def build_grid(tree: TimeTree, width: int = DEFAULT_WIDTH, leaders: bool = True) -> np.ndarray:
    """
    Rasterize a tree into a ``n_leaves x width`` character grid.

    Edges are drawn in node-number order (leaves first, then internal nodes),
    so a later stroke replaces an earlier one in a shared cell. Node markers
    are drawn after all edges. With ``leaders`` set, blank cells between a
    leaf and the present-day column are filled with dots.

    Args:
        tree: The tree to draw.
        width: Number of grid columns.
        leaders: Fill the gap between young leaves and the present with dots.

    Returns:
        The grid, present-day on the left (column 0).

    Raises:
        ValueError: If ``width`` is smaller than 2.
        DegenerateTreeError: If the tree has no leaves, or has more than one
            node and a root age that is not positive.
    """
    PlotConfig(width=width).validate()

    if tree.n_leaves == 0:
        raise DegenerateTreeError("Cannot draw a tree without leaves")

    grid = np.full((tree.n_leaves, width), BLANK, dtype="<U1")

    if tree.n_nodes == 1:
        grid[0, 0] = LEAF_MARKER
        return grid

    if tree.root.age <= 0:
        raise DegenerateTreeError(
            f"Cannot draw a tree of height {tree.root.age} with {tree.n_nodes} nodes"
        )

    nodes: List[Node] = tree.get_nodes()
    cells = _node_cells(tree, width)

    # Edges
    for node, cell in zip(nodes, cells):
        if node.parent is None:
            continue
        _draw_edge(grid, cell, cells[node.parent.number - 1])

    # Nodes
    for node, (y, x) in zip(nodes, cells):
        grid[y, x] = LEAF_MARKER if node.is_leaf() else INTERNAL_MARKER

    if leaders:
        for leaf in tree.get_leaves():
            y, x = cells[leaf.number - 1]
            gap = grid[y, :x]
            gap[gap == BLANK] = LEADER

    tt_logger.debug(f"Drew {tree.n_nodes} nodes on a {tree.n_leaves}x{width} grid")
    return grid


def render_ascii(
    tree: TimeTree,
    width: int = DEFAULT_WIDTH,
    label_leaves: bool = True,
    dots: bool = True,
) -> List[str]:
    """
    Lay out a tree as lines of text, one per leaf.

    Each line holds ``width`` characters with the root on the left and the
    present on the right, followed by a space and the leaf label when
    ``label_leaves`` is set. Dots leading to the labels are only drawn when
    both ``label_leaves`` and ``dots`` are set.

    Raises:
        ValueError: If ``width`` is smaller than 2.
        DegenerateTreeError: If the tree has zero height and more than one node.
    """
    config = PlotConfig(width=width, label_leaves=label_leaves, dots=dots)
    return render_with_config(tree, config)


def render_with_config(tree: TimeTree, config: PlotConfig) -> List[str]:
    config.validate()
    grid = build_grid(tree, config.width, leaders=config.label_leaves and config.dots)

    lines: List[str] = []
    for row, leaf in zip(grid, tree.get_leaves()):
        line = "".join(row[::-1])
        if config.label_leaves:
            line = f"{line} {leaf.label}"
        lines.append(line)
    return lines
