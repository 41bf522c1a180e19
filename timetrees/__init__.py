"""
Rooted phylogenetic time trees.

* ``TimeTree``: a rooted tree whose nodes carry absolute ages.
* ``Node``: the building block of a tree.
* ``parse_newick``: build a ``TimeTree`` from a Newick string.
* ``render_ascii``: lay a tree out as lines of ASCII art.
"""

from timetrees.exceptions import DegenerateTreeError, NewickSyntaxError, TimeTreeError
from timetrees.tree import Node, TimeTree
from timetrees.parser.newick_parser import parse_newick, parse_newick_trees
from timetrees.plot.ascii_layout import PlotConfig, render_ascii

__all__ = [
    "Node",
    "TimeTree",
    "parse_newick",
    "parse_newick_trees",
    "render_ascii",
    "PlotConfig",
    "TimeTreeError",
    "NewickSyntaxError",
    "DegenerateTreeError",
]
