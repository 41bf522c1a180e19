"""Tree summaries and ASCII drawings for logs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from timetrees.logger.base_logger import AlgorithmLogger

if TYPE_CHECKING:
    from timetrees.tree import TimeTree


class TreeLogger(AlgorithmLogger):
    """Extension of AlgorithmLogger with tree visualization support."""

    def log_tree(self, tree: "TimeTree", title: str = "Time Tree", width: int = 70):
        """Log the summary line, height and ASCII layout of a tree."""
        if self.disabled:
            return

        # Imported here, the layout engine itself logs through this package
        from timetrees.exceptions import DegenerateTreeError
        from timetrees.plot.ascii_layout import render_ascii

        self.subsection(title)
        self.info(str(tree))
        self.result("Height", tree.height)

        try:
            lines = render_ascii(tree, width=width)
        except DegenerateTreeError as e:
            self.warning(f"Tree cannot be drawn: {e}")
            return

        for line in lines:
            self.logger.info(line)
