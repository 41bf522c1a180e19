"""
Newick format parser module for time trees.

This module parses Newick strings into ``TimeTree`` objects, converting the
branch lengths found in the text into absolute node ages.
"""

from .newick_parser import (
    NewickScanner,
    TOKEN_PATTERNS,
    parse_newick,
    parse_newick_trees,
    read_tree,
    read_node,
    read_label,
    read_annotation,
    read_branch_length,
    tree_height,
    branch_lengths_to_ages,
)

__all__ = [
    "NewickScanner",
    "TOKEN_PATTERNS",
    "parse_newick",
    "parse_newick_trees",
    "read_tree",
    "read_node",
    "read_label",
    "read_annotation",
    "read_branch_length",
    "tree_height",
    "branch_lengths_to_ages",
]
