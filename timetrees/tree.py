from __future__ import annotations
import json
import re
from typing import Optional, Any, Dict, List

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self


_BAREWORD = re.compile(r"\w+")
_NUMBER = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def _quote(text: str) -> str:
    """Quote a label unless it is a bareword. Empty labels stay empty."""
    if text == "" or _BAREWORD.fullmatch(text):
        return text
    if "'" in text:
        return f'"{text}"'
    return f"'{text}'"


def _quote_annotation(text: str) -> str:
    """
    Quote an annotation key or value so that it reads back unchanged.

    Numbers are written bare. Barewords starting like a number ("1abc") and
    empty strings must be quoted, the reader tries numbers first and needs
    a token on both sides of '='.
    """
    if _NUMBER.fullmatch(text):
        return text
    if text and _NUMBER.match(text) is None and _BAREWORD.fullmatch(text):
        return text
    if "'" in text:
        return f'"{text}"'
    return f"'{text}'"


def _format_length(length: float) -> str:
    # repr of a float is the shortest string that parses back to the same value
    return repr(float(length))


class Node:
    """
    Node of a rooted time tree.

    Every node carries an absolute ``age`` measured from the most recent
    leaf, so the length of the edge above a node is derived from the ages
    of the node and its parent rather than stored.

    Attributes:
        children: Ordered list of child nodes. Empty for leaves.
        parent: The parent node, or None for the root.
        age: Non-negative age of the node. Increases toward the root.
        label: Possibly empty display name, usually set on leaves only.
        annotation: String metadata read from ``[&key=value,...]`` blocks.
        number: 1-based identifier assigned by ``TimeTree``; -1 until then.
    """

    __slots__ = (
        "children",
        "parent",
        "age",
        "label",
        "annotation",
        "number",
    )

    children: List[Self]
    parent: Optional[Self]
    age: float
    label: str
    annotation: Dict[str, str]
    number: int

    def __init__(
        self,
        children: Optional[List[Self]] = None,
        label: str = "",
        age: float = 0.0,
        annotation: Optional[Dict[str, str]] = None,
    ):
        # Avoid mutable default arguments; create fresh containers
        self.children = []
        self.parent = None
        self.age = age
        self.label = label
        self.annotation = dict(annotation) if annotation is not None else {}
        self.number = -1
        for child in children or []:
            self.add_child(child)

    def __repr__(self) -> str:
        return f"Node('{self.label}')"

    def __str__(self) -> str:
        kind = "Root" if self.is_root() else "Non-root"
        label = f"label: {self.label}" if self.label else "no label"
        return f"{kind} node (age: {self.age}, children: {len(self.children)}, {label})"

    # ------------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------------
    def add_child(self, node: Self) -> None:
        node.parent = self
        self.children.append(node)

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def is_internal(self) -> bool:
        return bool(self.children)

    def get_root(self) -> Self:
        cur = self
        while cur.parent is not None:
            cur = cur.parent
        return cur

    def edge_length(self) -> float:
        """
        Return the length of the edge above this node.

        Always 0.0 for a root node.
        """
        if self.parent is None:
            return 0.0
        return self.parent.age - self.age

    # ------------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------------
    def traverse(self) -> List[Self]:
        """
        Return a list of all nodes in the subtree rooted at this node (Pre-order).
        Uses an iterative stack approach to avoid recursion depth issues.
        """
        nodes: List[Self] = []
        stack: List[Self] = [self]

        while stack:
            current = stack.pop()
            nodes.append(current)
            # Add children in reverse to maintain left-to-right visit order (pre-order)
            for child in reversed(current.children):
                stack.append(child)

        return nodes

    def get_leaves(self) -> List[Self]:
        """Return all leaf nodes below (and including) this node, left to right."""
        return [node for node in self.traverse() if not node.children]

    def get_internal_nodes(self) -> List[Self]:
        """Return all internal nodes below (and including) this node, in pre-order."""
        return [node for node in self.traverse() if node.children]

    def get_descendant_count(self) -> int:
        """Return the number of nodes in the clade below (and including) this node."""
        return len(self.traverse())

    # ------------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------------
    def deep_copy(self) -> Self:
        new_node = type(self)(label=self.label, age=self.age, annotation=self.annotation)
        for child in self.children:
            new_node.add_child(child.deep_copy())
        return new_node

    def get_sorted(self, reverse: bool = False) -> Self:
        """
        Produce a copy of the clade below this node in which the children of
        every node are ordered by their descendant count.

        The sort is stable, so children with equal counts keep their original
        order. Setting ``reverse=True`` places the largest clades first.
        """
        new_node = type(self)(label=self.label, age=self.age, annotation=self.annotation)
        copies = [child.get_sorted(reverse=reverse) for child in self.children]
        counts = {id(c): c.get_descendant_count() for c in copies}
        for child in sorted(copies, key=lambda c: counts[id(c)], reverse=reverse):
            new_node.add_child(child)
        return new_node

    # ------------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------------
    def to_newick(self) -> str:
        """Return the Newick representation of the subtree below this node."""
        meta = ""
        if self.annotation:
            meta = (
                "[&"
                + ",".join(
                    f"{_quote_annotation(k)}={_quote_annotation(v)}"
                    for k, v in self.annotation.items()
                )
                + "]"
            )

        child_str = ""
        if self.children:
            child_str = "(" + ",".join(ch.to_newick() for ch in self.children) + ")"

        return f"{child_str}{_quote(self.label)}{meta}:{_format_length(self.edge_length())}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "age": self.age,
            "annotation": dict(self.annotation),
            "number": self.number,
            "children": [child.to_dict() for child in self.children],
        }


class TimeTree:
    """
    A rooted phylogenetic time tree.

    On construction the nodes are numbered: leaves receive 1..n_leaves in
    left-to-right order and internal nodes n_leaves+1..n_nodes in pre-order.
    The node list and counts are computed once; rebuild the tree with
    ``TimeTree(root)`` after changing its structure.

    Trees are usually built from Newick text::

        tree = TimeTree.from_newick("((A:1,B:1):1,C:2):0;")
        print(tree.plot())
    """

    def __init__(self, root: Node):
        leaves = root.get_leaves()
        internals = root.get_internal_nodes()

        self.root = root
        self.nodes: List[Node] = leaves + internals
        for i, node in enumerate(self.nodes, start=1):
            node.number = i
        self.n_leaves = len(leaves)
        self.n_nodes = len(self.nodes)

    @classmethod
    def from_newick(cls, newick: str) -> "TimeTree":
        from timetrees.parser.newick_parser import parse_newick

        return parse_newick(newick)

    def __repr__(self) -> str:
        return f"TimeTree(n_leaves={self.n_leaves}, n_nodes={self.n_nodes})"

    def __str__(self) -> str:
        return (
            f"A phylogenetic tree with {self.n_leaves} leaves "
            f"({self.n_nodes} nodes in total)"
        )

    @property
    def height(self) -> float:
        return self.root.age

    def get_nodes(self) -> List[Node]:
        return self.nodes

    def get_leaves(self) -> List[Node]:
        return self.nodes[: self.n_leaves]

    def get_internal_nodes(self) -> List[Node]:
        return self.nodes[self.n_leaves :]

    def get_leaf_count(self) -> int:
        return self.n_leaves

    def get_node_count(self) -> int:
        return self.n_nodes

    def get_sorted(self, reverse: bool = False) -> "TimeTree":
        """Return a copy in which children are sorted by their descendant counts."""
        return TimeTree(self.root.get_sorted(reverse=reverse))

    def get_copy(self) -> "TimeTree":
        return TimeTree(self.root.deep_copy())

    def to_newick(self) -> str:
        return self.root.to_newick() + ";"

    def to_dict(self) -> Dict[str, Any]:
        return self.root.to_dict()

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def plot(self, width: int = 70, label_leaves: bool = True, dots: bool = True) -> str:
        """
        Return an ASCII drawing of the tree, one line per leaf.

        Args:
            width: Number of columns used for the drawing itself.
            label_leaves: Append each leaf's label to its line.
            dots: Connect leaves younger than the present to their labels with dots.
        """
        from timetrees.plot.ascii_layout import render_ascii

        return "\n".join(
            render_ascii(self, width=width, label_leaves=label_leaves, dots=dots)
        )
