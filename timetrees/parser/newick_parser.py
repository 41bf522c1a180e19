import re

from typing import Optional, List, Dict, Pattern, Tuple
from timetrees.exceptions import NewickSyntaxError
from timetrees.logger import tt_logger
from timetrees.tree import Node, TimeTree


# ===================================================================
# 1. TOKENS
# ===================================================================

# Every pattern is matched anchored at the current scan position.
TOKEN_PATTERNS: Dict[str, Pattern[str]] = {
    "open_paren": re.compile(r"\("),
    "close_paren": re.compile(r"\)"),
    "open_an": re.compile(r"\[&"),
    "close_an": re.compile(r"\]"),
    "eq": re.compile(r"="),
    "colon": re.compile(r":"),
    "comma": re.compile(r","),
    "semicolon": re.compile(r";"),
    "number": re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?"),
    "string": re.compile(r"\w+|\"[^\"]*\"|'[^']*'"),
}

WHITESPACE = " \t"


class NewickScanner:
    """
    Cursor over a Newick string.

    Whitespace (space, tab) is skipped before every match attempt. Optional
    tokens that fail to match consume nothing; mandatory tokens raise
    ``NewickSyntaxError`` pointing at the current position.
    """

    def __init__(self, text: str, start: int = 0):
        self.text = text
        self.index = start

    def skip_whitespace(self, chars: str = WHITESPACE) -> None:
        while self.index < len(self.text) and self.text[self.index] in chars:
            self.index += 1

    def at_end(self) -> bool:
        return self.index >= len(self.text)

    def fail(self, token: str) -> NewickSyntaxError:
        found = None if self.at_end() else self.text[self.index]
        return NewickSyntaxError(token, self.index + 1, found, self.text)

    def match(self, token: str, must_match: bool = False) -> Optional[str]:
        """
        Try to match ``token`` at the current position.

        Returns:
            The matched text, or None if the token is absent and optional.

        Raises:
            NewickSyntaxError: If the token is absent and ``must_match`` is set.
        """
        self.skip_whitespace()

        m = TOKEN_PATTERNS[token].match(self.text, self.index)
        if m is None:
            if must_match:
                raise self.fail(token)
            return None

        self.index = m.end()
        return m.group(0)


# ===================================================================
# 2. GRAMMAR RULES
# ===================================================================


def _unquote(token: str) -> str:
    if token[0] in "\"'":
        return token[1:-1]
    return token


def read_tree(scanner: NewickScanner) -> Node:
    """Tree := Node ';'"""
    root = read_node(scanner)
    scanner.match("semicolon", must_match=True)
    return root


def read_node(scanner: NewickScanner) -> Node:
    """
    Node := '(' Node (',' Node)* ')' Label? Annotation? Branch?
          | Label? Annotation? Branch?

    The branch length is stored in ``age`` until ages are normalized.
    """
    node = Node()
    if scanner.match("open_paren") is not None:
        while True:
            node.add_child(read_node(scanner))
            if scanner.match("comma") is None:
                break
        scanner.match("close_paren", must_match=True)

    node.label = read_label(scanner)
    node.annotation = read_annotation(scanner)
    node.age = read_branch_length(scanner)
    return node


def read_label(scanner: NewickScanner) -> str:
    token = scanner.match("string")
    if token is None:
        return ""
    return _unquote(token)


def _read_annotation_atom(scanner: NewickScanner) -> str:
    token = scanner.match("number")
    if token is None:
        token = scanner.match("string", must_match=True)
    return _unquote(token)


def read_annotation(scanner: NewickScanner) -> Dict[str, str]:
    """Annotation := '[&' Key '=' Value (',' Key '=' Value)* ']'"""
    annotation: Dict[str, str] = {}

    if scanner.match("open_an") is None:
        return annotation

    while True:
        key = _read_annotation_atom(scanner)
        scanner.match("eq", must_match=True)
        annotation[key] = _read_annotation_atom(scanner)

        if scanner.match("comma") is None:
            break

    scanner.match("close_an", must_match=True)
    return annotation


def read_branch_length(scanner: NewickScanner) -> float:
    """Branch := ':' Number"""
    if scanner.match("colon") is None:
        return 0.0
    return float(scanner.match("number", must_match=True))


# ===================================================================
# 3. BRANCH LENGTHS TO AGES
# ===================================================================


def tree_height(root: Node) -> float:
    """
    Return the largest cumulative branch length from above the root to any
    node, while ``age`` still holds branch lengths.
    """
    height = float("-inf")
    stack: List[Tuple[Node, float]] = [(root, 0.0)]
    while stack:
        node, parent_time = stack.pop()
        current_time = parent_time + node.age
        height = max(height, current_time)
        for child in node.children:
            stack.append((child, current_time))
    return height


def branch_lengths_to_ages(root: Node) -> float:
    """
    Replace the branch length stored in every node's ``age`` with its
    absolute age, ``tree_height - cumulative_branch_length(node)``.

    Returns:
        The tree height used as reference.
    """
    height = tree_height(root)

    stack: List[Tuple[Node, float]] = [(root, 0.0)]
    while stack:
        node, parent_time = stack.pop()
        if node.age < 0:
            tt_logger.warning(
                f"Negative branch length {node.age} above node '{node.label}'; "
                "ages will not decrease toward the leaves."
            )
        current_time = parent_time + node.age
        node.age = height - current_time
        for child in node.children:
            stack.append((child, current_time))

    return height


# ===================================================================
# 4. PUBLIC API FUNCTIONS
# ===================================================================


def _build(root: Node) -> TimeTree:
    height = branch_lengths_to_ages(root)
    tree = TimeTree(root)
    tt_logger.debug(f"Parsed {tree} with height {height}")
    return tree


def parse_newick(newick: str) -> TimeTree:
    """
    Parse a single Newick tree into a ``TimeTree``.

    Branch lengths on input are converted to node ages. Only whitespace may
    follow the terminating semicolon.

    Args:
        newick: Newick format string, e.g. ``"((A:1,B:1):1,C:2):0;"``.

    Returns:
        The parsed tree.

    Raises:
        NewickSyntaxError: If the string does not match the grammar.
    """
    scanner = NewickScanner(newick)
    root = read_tree(scanner)
    scanner.skip_whitespace()
    if not scanner.at_end():
        raise scanner.fail("end_of_input")
    return _build(root)


def parse_newick_trees(newick: str) -> List[TimeTree]:
    """
    Parse one or more semicolon-terminated trees separated by whitespace or
    newlines.

    Raises:
        NewickSyntaxError: If any tree does not match the grammar.
    """
    separators = WHITESPACE + "\r\n"
    scanner = NewickScanner(newick)
    trees: List[TimeTree] = []

    scanner.skip_whitespace(separators)
    while not scanner.at_end():
        trees.append(_build(read_tree(scanner)))
        scanner.skip_whitespace(separators)

    tt_logger.debug(f"Parsed {len(trees)} tree(s)")
    return trees
